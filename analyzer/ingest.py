# analyzer/ingest.py
"""
Ingestion: raw scanner output text -> typed Records.

- Accepts either one JSON array of finding objects or newline-delimited JSON objects.
- Any decode failure rejects the whole batch with a single ParseError; no partial results.
- Field extraction is total: a missing or wrongly-typed path yields None, never an error.
"""

import json
import logging
from json import JSONDecodeError
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from models import ComplianceValue, ParseError, Record, Remediation

logger = logging.getLogger(__name__)

# --- Null-safe field access ----------------------------------------------------

def _dig(obj: Any, *path: Any) -> Any:
    """
    Follow a path of dict keys / list indexes. Returns None as soon as a step is missing.
    """
    cur = obj
    for step in path:
        if isinstance(step, int):
            if not isinstance(cur, list) or len(cur) <= step:
                return None
        elif not isinstance(cur, dict):
            return None
        cur = cur[step] if isinstance(step, int) else cur.get(step)
        if cur is None:
            return None
    return cur


def _as_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = value if isinstance(value, str) else str(value)
    return text or None


def _compliance_from(value: Any) -> Optional[Mapping[str, ComplianceValue]]:
    if not isinstance(value, dict):
        return None
    mapping: Dict[str, ComplianceValue] = {}
    for key, item in value.items():
        if isinstance(item, list):
            mapping[str(key)] = tuple("" if v is None else str(v) for v in item)
        else:
            mapping[str(key)] = "" if item is None else str(item)
    return MappingProxyType(mapping)


def _remediation_from(value: Any) -> Optional[Remediation]:
    if not isinstance(value, dict):
        return None
    refs = value.get("references")
    references = tuple(r for r in (_as_str(x) for x in refs) if r) if isinstance(refs, list) else ()
    return Remediation(description=_as_str(value.get("desc")), references=references)

# --- Record lifting --------------------------------------------------------------

def record_from_object(obj: Any) -> Record:
    """
    Lift one decoded finding object (Prowler OCSF layout) into a Record.
    Anything that is not a JSON object becomes a Record with every field missing.
    """
    if not isinstance(obj, dict):
        return Record()
    return Record(
        status_code=_as_str(obj.get("status_code")),
        severity=_as_str(obj.get("severity")),
        region=_as_str(_dig(obj, "cloud", "region")),
        account_id=_as_str(_dig(obj, "cloud", "account", "uid")),
        service_name=_as_str(_dig(obj, "resources", 0, "group", "name")),
        title=_as_str(_dig(obj, "finding_info", "title")),
        description=_as_str(_dig(obj, "finding_info", "desc")),
        risk_details=_as_str(obj.get("risk_details")),
        resource_id=_as_str(_dig(obj, "resources", 0, "uid")),
        check_id=_as_str(_dig(obj, "metadata", "event_code")),
        remediation=_remediation_from(obj.get("remediation")),
        compliance=_compliance_from(_dig(obj, "unmapped", "compliance")),
        raw=obj,
    )


def records_from_objects(items: Iterable[Any]) -> List[Record]:
    return [record_from_object(item) for item in items]

# --- Text decoding ---------------------------------------------------------------

def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _decode_array(text: str) -> List[Any]:
    try:
        data = _loads(text)
    except JSONDecodeError as e:
        raise ParseError(f"Invalid JSON array: {e.msg} (line {e.lineno} column {e.colno})") from e
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Invalid JSON array: {e}") from e
    return data if isinstance(data, list) else [data]


def _decode_lines(text: str) -> List[Any]:
    objects: List[Any] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            objects.append(_loads(line))
        except JSONDecodeError as e:
            raise ParseError(f"Invalid JSON on line {lineno}: {e.msg} (column {e.colno})") from e
        except (ValueError, RecursionError) as e:
            raise ParseError(f"Invalid JSON on line {lineno}: {e}") from e
    return objects


def normalize(raw_text: str) -> List[Record]:
    """
    Decode a whole batch of scanner output into Records.

    - Text whose first non-blank character is '[' is decoded as one JSON array.
    - Otherwise every non-blank line is decoded as one JSON object, in order.
    - Raises ParseError if any part fails to decode.
    """
    text = raw_text.lstrip("\ufeff")
    array_mode = text.strip().startswith("[")
    try:
        objects = _decode_array(text) if array_mode else _decode_lines(text)
    except ParseError as e:
        logger.error("Rejected findings batch: %s", e)
        raise
    records = records_from_objects(objects)
    logger.info("Ingested %d findings (%s)", len(records), "json array" if array_mode else "json lines")
    return records
