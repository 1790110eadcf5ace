class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    VERIFY_QUIZ = V1 + "/verify-quiz"
    VERIFICATION_LOGS = V1 + "/verification-logs"


class ExternalURIs:
    QURAN_UTHMANI = "/quran/verses/uthmani"
    QURAN_TRANSLATION = "/quran/translations/{translation_id}"
    QURAN_VERSES_BY_CHAPTER = "/verses/by_chapter/{chapter}"


class Thresholds:
    # Best-match scan floor: below this a record is noise, not a candidate.
    MATCH_FLOOR = 0.2
    # At or above this an answer agrees with the canonical translation.
    VERIFIED = 0.4
    # A replacement must score below this against the original answer.
    DISTINCT = 0.6


class Limits:
    MAX_CONTENT_CHARS = 200_000
    MAX_QUESTIONS = 200
    AUDIT_QUESTION_CHARS = 100


CORRECTNESS_MARKER = "✅"
