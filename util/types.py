# util/types.py
from typing import TypedDict


# Flow: plain JSON shapes exchanged with Redis and the Quran.com API.
class CachedRecord(TypedDict):
    ordinal: int
    composite_key: str
    lead_word: str
    transliteration: str
    short_translation: str
    canonical_source_text: str
    canonical_translation: str


class VerificationContext(TypedDict, total=False):
    unit_number: int
    unit_name: str
    range_label: str
