"""Classifier configuration: stopwords, polarity lexicon, distortion phrases.

All tables are built once at import time and never mutated, so analyzers
share them by reference across requests and threads.

Polarity values follow the AFINN convention: integers from -5 (most
negative) to +5 (most positive).
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

from mindbridge.shared.models import DistortionCategory


@dataclass(frozen=True)
class ClassifierConfig:
    """Comparative-sentiment buckets and table versioning.

    A comparative score below a bound falls in that bucket; a score equal to
    a bound falls in the next (higher) one.
    """
    very_negative_below: float = -0.5
    negative_below: float = -0.2
    neutral_below: float = 0.2
    positive_below: float = 0.5

    # Version tracking for logs and /health
    lexicon_version: str = "2026.10.01"


STOPWORDS: FrozenSet[str] = frozenset({
    "about", "above", "after", "again", "all", "also", "am", "an", "and",
    "another", "any", "are", "as", "at", "be", "because", "been", "before",
    "being", "below", "between", "both", "but", "by", "came", "can", "cannot",
    "come", "could", "did", "do", "does", "doing", "during", "each", "few",
    "for", "from", "further", "get", "got", "has", "had", "he", "have", "her",
    "here", "him", "himself", "his", "how", "if", "in", "into", "is", "it",
    "its", "itself", "like", "make", "many", "me", "might", "more", "most",
    "much", "must", "my", "myself", "never", "now", "of", "on", "only", "or",
    "other", "our", "ours", "ourselves", "out", "over", "said", "same", "see",
    "should", "since", "so", "some", "still", "such", "take", "than", "that",
    "the", "their", "theirs", "them", "themselves", "then", "there", "these",
    "they", "this", "those", "through", "to", "too", "under", "until", "up",
    "very", "was", "way", "we", "well", "were", "what", "where", "when",
    "which", "while", "who", "whom", "with", "would", "why", "you", "your",
    "yours", "yourself",
    # Single characters left over from contractions ("don't" -> don, t)
    "a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m", "n",
    "o", "p", "q", "r", "s", "t", "u", "v", "w", "x", "y", "z",
    "_", "0", "1", "2", "3", "4", "5", "6", "7", "8", "9",
})


SENTIMENT_LEXICON: Mapping[str, int] = MappingProxyType({
    # ==========================================================================
    # STRONGLY NEGATIVE
    # ==========================================================================
    "suicide": -5, "suicidal": -5, "kill": -3, "killed": -3, "die": -3,
    "dead": -3, "death": -2, "hopeless": -4, "worthless": -4, "hate": -3,
    "hated": -3, "hating": -3, "horrible": -3, "terrible": -3, "awful": -3,
    "worst": -3, "miserable": -3, "devastated": -3, "despair": -3,
    "catastrophe": -3, "disaster": -2, "unbearable": -3, "disgusting": -3,
    "abuse": -3, "abused": -3, "panic": -3, "destroyed": -3, "agony": -3,
    "torture": -4, "tortured": -4,
    # ==========================================================================
    # NEGATIVE
    # ==========================================================================
    "sad": -2, "sadness": -2, "unhappy": -2, "depressed": -2,
    "depression": -2, "anxious": -2, "anxiety": -2, "afraid": -2,
    "scared": -2, "fear": -2, "fearful": -2, "worried": -3, "worry": -3,
    "lonely": -2, "alone": -2, "angry": -3, "anger": -3, "upset": -2,
    "hurt": -2, "hurting": -2, "pain": -2, "painful": -2, "cry": -1,
    "crying": -2, "tears": -2, "fail": -2, "failed": -2, "failing": -2,
    "failure": -2, "useless": -2, "stupid": -2, "idiot": -3, "loser": -3,
    "guilty": -3, "guilt": -3, "ashamed": -2, "shame": -2, "stressed": -2,
    "stress": -1, "overwhelmed": -2, "exhausted": -2, "tired": -2,
    "frustrated": -2, "frustration": -2, "bad": -3, "worse": -3,
    "wrong": -2, "problem": -2, "problems": -2, "trouble": -2, "lost": -3,
    "broken": -1, "empty": -1, "numb": -1, "weak": -2, "sick": -2,
    "nervous": -2, "disappointed": -2, "disappointing": -2, "regret": -2,
    "rejected": -1, "ignored": -2, "incompetent": -2, "trapped": -2,
    "burden": -2, "dread": -2, "cant": -1, "difficult": -1, "hard": -1,
    "crisis": -3, "emergency": -2, "dangerous": -2, "harm": -2,
    # ==========================================================================
    # POSITIVE
    # ==========================================================================
    "good": 3, "great": 3, "happy": 3, "happiness": 3, "glad": 3,
    "joy": 3, "joyful": 3, "love": 3, "loved": 3, "loving": 2,
    "wonderful": 4, "amazing": 4, "awesome": 4, "fantastic": 4,
    "excellent": 3, "brilliant": 4, "excited": 3, "exciting": 3,
    "grateful": 3, "thankful": 2, "thanks": 2, "thank": 2, "proud": 2,
    "calm": 2, "relaxed": 2, "peaceful": 2, "hope": 2, "hopeful": 2,
    "confident": 2, "better": 2, "best": 3, "nice": 3, "fun": 4,
    "enjoy": 2, "enjoyed": 2, "smile": 2, "smiling": 2, "laugh": 1,
    "support": 2, "supported": 2, "supportive": 2, "help": 2,
    "helpful": 2, "helping": 2, "kind": 2, "care": 2, "safe": 1,
    "strong": 2, "success": 2, "successful": 3, "win": 4, "won": 3,
    "ok": 2, "fine": 2, "want": 1, "positive": 2,
    "progress": 2, "improve": 2, "improved": 2, "improving": 2,
    "relief": 1, "relieved": 2, "motivated": 1, "energetic": 2,
    "accomplished": 2, "satisfied": 2, "pleased": 3, "cheerful": 2,
})


# Substring phrases per category, matched against lowercased text. Lists
# overlap ("terrible" is both mental filter and magnification). Phrases
# with capitals ("I feel", "I'm a") never match; product has not asked
# for them to be fixed.
DISTORTION_PATTERNS: Mapping[DistortionCategory, Tuple[str, ...]] = MappingProxyType({
    DistortionCategory.ALL_OR_NOTHING: (
        "always", "never", "everything", "nothing", "everyone", "nobody",
        "completely", "totally",
    ),
    DistortionCategory.OVERGENERALIZATION: (
        "every time", "all the time", "constantly", "everyone", "no one",
        "everything",
    ),
    DistortionCategory.MENTAL_FILTER: (
        "terrible", "horrible", "awful", "worst", "disaster", "catastrophe",
    ),
    DistortionCategory.DISQUALIFYING_POSITIVE: (
        "doesn't count", "doesn't matter", "not important", "yeah but",
        "that's not the point",
    ),
    DistortionCategory.JUMPING_TO_CONCLUSIONS: (
        "must be thinking", "must be feeling", "knows that", "I know they",
        "they think", "they know",
    ),
    DistortionCategory.MAGNIFICATION: (
        "disaster", "horrible", "terrible", "unbearable", "can't stand",
        "can't handle",
    ),
    DistortionCategory.EMOTIONAL_REASONING: (
        "I feel", "I don't feel", "it feels like", "because I feel",
    ),
    DistortionCategory.SHOULD_STATEMENTS: (
        "should", "must", "have to", "ought to", "supposed to",
    ),
    DistortionCategory.LABELING: (
        "I'm a", "they're a", "he's a", "she's a", "I am", "they are",
        "loser", "failure", "idiot",
    ),
    DistortionCategory.PERSONALIZATION: (
        "my fault", "because of me", "my responsibility", "I caused",
        "I'm to blame",
    ),
})


DEFAULT_REFRAMING_SUGGESTIONS: Tuple[str, ...] = (
    "Consider whether this thought is based on facts or assumptions.",
    "How would you advise a friend who had this thought?",
    "Is there another way to interpret this situation?",
)
