"""
AHA blood pressure categories. Informational only, not a diagnosis.
"""
import enum


class BPCategory(enum.Enum):
    NORMAL = 'normal'
    ELEVATED = 'elevated'
    HIGH_STAGE_1 = 'high_stage_1'
    HIGH_STAGE_2 = 'high_stage_2'
    CRISIS = 'crisis'

    @property
    def label(self):
        return _LABELS[self]


_LABELS = {
    BPCategory.NORMAL: 'Normal',
    BPCategory.ELEVATED: 'Elevated',
    BPCategory.HIGH_STAGE_1: 'High Stage 1',
    BPCategory.HIGH_STAGE_2: 'High Stage 2',
    BPCategory.CRISIS: 'Crisis',
}

# Most severe first; the first matching rule wins.
RULES = (
    (lambda s, d: s >= 180 or d >= 120, BPCategory.CRISIS),
    (lambda s, d: s >= 140 or d >= 90, BPCategory.HIGH_STAGE_2),
    (lambda s, d: s >= 130 or d >= 80, BPCategory.HIGH_STAGE_1),
    (lambda s, d: s >= 120 and d < 80, BPCategory.ELEVATED),
)


def classify_bp(systolic, diastolic):
    """Classify a reading into a BPCategory."""
    for predicate, category in RULES:
        if predicate(systolic, diastolic):
            return category
    return BPCategory.NORMAL
