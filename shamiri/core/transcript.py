"""
Transcript assembly for the per-entry assistant.

The caller owns the conversation and resends it in full each round as two
parallel lists. ``assemble`` interleaves them behind one instruction message
that carries the entry context:

    system(instruction) user(q0) assistant(a0) user(q1) ... user(qN)

The trailing user message is the question the provider must answer now.
"""

from typing import List, Sequence

from shamiri.core.context import ContextBlock
from shamiri.errors import ValidationError
from shamiri.llm.prompts import ASK_ENTRY_INSTRUCTION
from shamiri.llm.providers.base import ChatMessage, Role


def validate_turns(questions: Sequence[str], answers: Sequence[str]) -> None:
    if not questions:
        raise ValidationError("At least one question is required")

    for index, question in enumerate(questions):
        if not isinstance(question, str) or not question.strip():
            raise ValidationError(
                "Questions must be non-empty text", {"field": "questions", "index": index}
            )

    for index, answer in enumerate(answers):
        if not isinstance(answer, str):
            raise ValidationError("Answers must be text", {"field": "answers", "index": index})

    if len(answers) not in (len(questions) - 1, len(questions)):
        raise ValidationError(
            "Answers must number the same as questions or one fewer",
            {"questions": len(questions), "answers": len(answers)},
        )


def build_instruction(context: ContextBlock) -> str:
    return ASK_ENTRY_INSTRUCTION.format(context=context.text)


def assemble(context: ContextBlock, questions: Sequence[str], answers: Sequence[str]) -> List[ChatMessage]:
    """
    Build the message list sent to the completion provider.

    Args:
        context: Rendered entry embedded verbatim in the instruction
        questions: Every question so far, oldest first
        answers: Every answer so far, oldest first; may trail questions by one

    Returns:
        A new list of messages. The inputs are not modified.

    Raises:
        ValidationError: empty or non-text questions, non-text answers, or a
            length mismatch between the two lists.
    """
    validate_turns(questions, answers)

    messages = [ChatMessage(role=Role.SYSTEM, content=build_instruction(context).strip())]
    for index, question in enumerate(questions):
        messages.append(ChatMessage(role=Role.USER, content=question.strip()))
        if index < len(answers):
            messages.append(ChatMessage(role=Role.ASSISTANT, content=answers[index].strip()))

    return messages
