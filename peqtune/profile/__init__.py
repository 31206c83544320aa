"""Profile persistence (JSON and filter-list text)."""
from .codec import (
    JSON_FORMAT,
    TEXT_FORMAT,
    ParsedProfile,
    detect_format,
    export_json,
    export_text,
    import_json,
    import_profile,
    import_text,
    load_profile,
    read_profile,
    write_profile,
)
from .errors import FormatError, ParseError, ProfileError

__all__ = [
    "FormatError",
    "JSON_FORMAT",
    "ParseError",
    "ParsedProfile",
    "ProfileError",
    "TEXT_FORMAT",
    "detect_format",
    "export_json",
    "export_text",
    "import_json",
    "import_profile",
    "import_text",
    "load_profile",
    "read_profile",
    "write_profile",
]
