"""
Mood catalogue.

Every entry carries one of these codes. ``score`` runs from 1 (lowest) to
10 and ``image_query`` feeds the mood image lookup.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel


class Mood(BaseModel):
    id: str
    label: str
    emoji: str
    score: int
    color: str
    prompt: str
    image_query: str


MOODS: Dict[str, Mood] = {
    mood.id: mood
    for mood in [
        Mood(id="HAPPY", label="Happy", emoji="😊", score=9, color="amber",
             prompt="What's making you smile today?", image_query="happy sunshine"),
        Mood(id="GRATEFUL", label="Grateful", emoji="🙏", score=9, color="yellow",
             prompt="What are you thankful for today?", image_query="gratitude thankful"),
        Mood(id="EXCITED", label="Excited", emoji="🤩", score=8, color="orange",
             prompt="What are you looking forward to?", image_query="excitement celebration"),
        Mood(id="CALM", label="Calm", emoji="😌", score=8, color="teal",
             prompt="What brought you peace today?", image_query="calm lake"),
        Mood(id="HOPEFUL", label="Hopeful", emoji="🌅", score=7, color="sky",
             prompt="What gives you hope?", image_query="sunrise hope"),
        Mood(id="CONTENT", label="Content", emoji="🙂", score=7, color="green",
             prompt="What made today feel enough?", image_query="cozy home"),
        Mood(id="NEUTRAL", label="Neutral", emoji="😐", score=5, color="gray",
             prompt="How was your day?", image_query="nature peaceful"),
        Mood(id="CONFUSED", label="Confused", emoji="😕", score=4, color="violet",
             prompt="What's puzzling you right now?", image_query="maze path"),
        Mood(id="TIRED", label="Tired", emoji="😴", score=4, color="slate",
             prompt="What drained your energy today?", image_query="rest sleep"),
        Mood(id="ANXIOUS", label="Anxious", emoji="😰", score=3, color="purple",
             prompt="What's weighing on your mind?", image_query="storm clouds"),
        Mood(id="FRUSTRATED", label="Frustrated", emoji="😤", score=3, color="orange",
             prompt="What's blocking your progress?", image_query="obstacle wall"),
        Mood(id="SAD", label="Sad", emoji="😢", score=2, color="blue",
             prompt="What's causing you to feel down?", image_query="rain window"),
        Mood(id="ANGRY", label="Angry", emoji="😠", score=2, color="red",
             prompt="What's making you frustrated?", image_query="fire volcano"),
        Mood(id="OVERWHELMED", label="Overwhelmed", emoji="😵", score=2, color="rose",
             prompt="What's on your plate right now?", image_query="ocean waves"),
    ]
}


def get_mood_by_id(mood_id: Optional[str]) -> Optional[Mood]:
    """Case-insensitive lookup; None for unknown or empty codes."""
    if not mood_id:
        return None
    return MOODS.get(mood_id.strip().upper())


def list_moods() -> List[Mood]:
    return list(MOODS.values())
