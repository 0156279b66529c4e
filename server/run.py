"""Console entry point: ``shamiri-server``."""

import uvicorn

from server.config import config


def main() -> None:
    server = config.SERVER
    # The reloader only supports a single worker
    reload_enabled = server.RELOAD and server.WORKERS == 1

    uvicorn.run(
        "server.main:app",
        host=server.HOST,
        port=server.PORT,
        workers=server.WORKERS,
        reload=reload_enabled,
        log_level=config.log_level.lower(),
        proxy_headers=server.PROXY_HEADERS,
        forwarded_allow_ips=server.FORWARDED_ALLOW_IPS,
    )


if __name__ == "__main__":
    main()
