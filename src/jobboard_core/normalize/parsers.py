"""Value coercions applied by RecordNormalizer to resolved raw values."""

import re
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

DATE_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d", "%d-%m-%Y", "%Y/%m/%d")

# Epoch values above this are taken as milliseconds
_EPOCH_MS_THRESHOLD = 10**11

_TRUE_STRINGS = {"true", "yes", "ja", "1", "y"}
_FALSE_STRINGS = {"false", "no", "nee", "0", "n"}

# Application status synonyms -> canonical status
_APPLICATION_STATUS_MAP: dict[str, str] = {
    "pending": "pending",
    "nieuw": "pending",
    "ingediend": "pending",
    "submitted": "pending",
    "reviewing": "reviewing",
    "in behandeling": "reviewing",
    "in_review": "reviewing",
    "interview": "interview",
    "uitgenodigd": "interview",
    "gesprek": "interview",
    "rejected": "rejected",
    "afgewezen": "rejected",
    "accepted": "accepted",
    "aangenomen": "accepted",
    "geaccepteerd": "accepted",
}

_LOCATION_TYPE_MAP: dict[str, str] = {
    "online": "online",
    "video": "online",
    "remote": "online",
    "locatie": "onsite",
    "op locatie": "onsite",
    "onsite": "onsite",
    "on-site": "onsite",
    "fysiek": "onsite",
}


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Coerce store timestamps to aware UTC datetimes.
    Accepts datetime/date, ISO or common date strings, epoch seconds/millis,
    and Firestore-style {"seconds", "nanoseconds"} or {"_seconds"} maps.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) >= _EPOCH_MS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        try:
            return datetime.fromtimestamp(float(seconds) + float(nanos) / 1e9, tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            return parsed.astimezone(timezone.utc) if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
        except ValueError:
            pass
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text[:19], fmt).replace(tzinfo=timezone.utc)
            except ValueError:
                continue
    return None


def to_number(value: Any) -> Optional[float]:
    """Numeric coercion for size/duration fields; None when not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None


def to_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


def to_text(value: Any) -> Optional[str]:
    """Scalar to string; mappings and lists are not text."""
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_string_list(value: Any) -> list[str]:
    """List of strings from a list, or from a comma/semicolon/newline separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [s.strip() for s in re.split(r"[,;\n]+", value) if s.strip()]
    if isinstance(value, (list, tuple)):
        out: list[str] = []
        for item in value:
            if isinstance(item, Mapping):
                label = item.get("name") or item.get("naam") or item.get("skill")
                if label:
                    out.append(str(label).strip())
            elif item is not None and str(item).strip():
                out.append(str(item).strip())
        return out
    return []


def to_record_list(value: Any) -> list[Any]:
    """Sub-record collections (experience, education): lists pass, a single mapping is wrapped."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, Mapping):
        return [dict(value)]
    return []


def to_mapping(value: Any) -> Optional[dict[str, Any]]:
    return dict(value) if isinstance(value, Mapping) else None


def normalize_application_status(value: Any) -> Optional[str]:
    text = to_text(value)
    if text is None:
        return None
    key = text.strip().lower()
    return _APPLICATION_STATUS_MAP.get(key, key or None)


def normalize_location_type(value: Any) -> Optional[str]:
    text = to_text(value)
    if text is None:
        return None
    key = text.strip().lower()
    return _LOCATION_TYPE_MAP.get(key, key or None)


def normalize_status(value: Any) -> Optional[str]:
    text = to_text(value)
    if text is None or not text.strip():
        return None
    return text.strip().lower()


_MEETING_STATUS_MAP: dict[str, str] = {
    "gepland": "scheduled",
    "ingepland": "scheduled",
    "bevestigd": "confirmed",
    "geannuleerd": "cancelled",
    "canceled": "cancelled",
    "afgerond": "completed",
    "voltooid": "completed",
}

_FAVORITE_KIND_MAP: dict[str, str] = {
    "job": "job",
    "vacature": "job",
    "posting": "job",
    "candidate": "candidate",
    "kandidaat": "candidate",
    "jobseeker": "candidate",
    "werkzoekende": "candidate",
    "user": "candidate",
}


def normalize_meeting_status(value: Any) -> Optional[str]:
    key = normalize_status(value)
    if key is None:
        return None
    return _MEETING_STATUS_MAP.get(key, key)


def normalize_favorite_kind(value: Any) -> Optional[str]:
    """Explicit favorite discriminator -> "job" | "candidate"; None when unrecognized."""
    key = normalize_status(value)
    if key is None:
        return None
    return _FAVORITE_KIND_MAP.get(key)
