"""
Emotion vocabulary offered for each mood on the emotion check-in screen.
Unpleasant and pleasant moods share their lists; intensity carries the degree.
"""

from ..models.enums import Mood

UNPLEASANT_EMOTIONS = [
    "Stressed",
    "Anxious",
    "Irritated",
    "Sad",
    "Frustrated",
    "Depressed",
    "Guilty",
    "Unmotivated",
    "Worried",
    "Overwhelmed",
    "Lonely",
]

NEUTRAL_EMOTIONS = [
    "Tired",
    "Indifferent",
    "Neutral",
    "Thoughtful",
    "Calm",
    "Focused",
    "Curious",
]

PLEASANT_EMOTIONS = [
    "Happy",
    "Joyful",
    "Content",
    "Excited",
    "Grateful",
    "Confident",
    "Inspired",
    "Motivated",
    "Hopeful",
    "Proud",
    "Peaceful",
    "Satisfied",
]

EMOTIONS_BY_MOOD = {
    Mood.VERY_UNPLEASANT: UNPLEASANT_EMOTIONS,
    Mood.UNPLEASANT: UNPLEASANT_EMOTIONS,
    Mood.NEUTRAL: NEUTRAL_EMOTIONS,
    Mood.PLEASANT: PLEASANT_EMOTIONS,
    Mood.VERY_PLEASANT: PLEASANT_EMOTIONS,
}

# Slider order, left to right
MOOD_SCALE = [
    Mood.VERY_UNPLEASANT,
    Mood.UNPLEASANT,
    Mood.NEUTRAL,
    Mood.PLEASANT,
    Mood.VERY_PLEASANT,
]

INTENSITY_MIN = 1
INTENSITY_MAX = 10
