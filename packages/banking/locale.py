from typing import Optional, Tuple

DEFAULT_LANGUAGE = "en"
DEFAULT_COUNTRY = "US"


def parse_accept_language(header: Optional[str]) -> Tuple[str, str]:
    """Language and country of the first ``Accept-Language`` entry.

    ``"fr-CA,fr;q=0.9"`` gives ``("fr", "CA")``. Missing parts fall back to
    English and the US.
    """
    first = (header or "").split(",")[0].split(";")[0].strip()
    language, _, region = first.partition("-")
    language = language.lower() if language and language != "*" else DEFAULT_LANGUAGE
    country = region.upper() if region else DEFAULT_COUNTRY
    return language, country
