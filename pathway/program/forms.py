"""Form persistence contract shared by every step form.

Load the newest answer record for the user (plus discriminator), decode it
into the form shape, keep edits local, then save so that exactly one live
record exists per key. Saving either upserts on a declared conflict key or
selects the existing record and updates it, inserting when none exists.
"""
import copy
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from pathway.models import Base, StepAnswer
from pathway.program.progress import record_completion, record_unlock
from pathway.session import ProgramSession
from pathway.store import RecordStore, StoreError

logger = logging.getLogger(__name__)

ANSWER_CONFLICT_KEY = ("namespace", "user_id", "discriminator")


def _empty_like(value: Any) -> Any:
    if isinstance(value, (dict, list, str)):
        return type(value)()
    return None


def loads_json(value: Optional[str], default: Any) -> Any:
    if not value:
        return default
    try:
        return json.loads(value)
    except ValueError:
        logger.warning("could not decode stored payload, using defaults")
        return default


def decode_json_field(value: Any, default: Any) -> Any:
    """Decode a field that legacy rows may hold as JSON-encoded text.

    Text fields keep the raw string when it does not parse, so free text
    that merely starts with a bracket survives a round trip. List and dict
    fields fall back to an empty container.
    """
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if not stripped.startswith(("{", "[")):
        return value
    try:
        return json.loads(stripped)
    except ValueError:
        if not isinstance(default, (list, dict)):
            return value
        logger.warning("could not decode encoded field value %r", stripped[:40])
        return _empty_like(default)


def parse_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        if value.get("text"):
            return str(value["text"])
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, list):
        if value and isinstance(value[0], dict) and value[0].get("text"):
            return str(value[0]["text"])
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _is_text_wrapper(value: Any) -> bool:
    if isinstance(value, dict):
        return bool(value.get("text"))
    return bool(value) and isinstance(value, list) and isinstance(value[0], dict) and bool(value[0].get("text"))


def parse_text_field(raw: Any) -> str:
    """Text stored for a text field, unwrapping legacy ``{"text": ...}`` encodings."""
    value = decode_json_field(raw, "")
    if _is_text_wrapper(value) or not isinstance(raw, str):
        return parse_text(value)
    return raw


def default_parse(initial: dict[str, Any], payload: dict[str, Any]) -> dict[str, Any]:
    data = copy.deepcopy(initial)
    for key, default in initial.items():
        if key not in payload:
            continue
        if isinstance(default, str):
            data[key] = parse_text_field(payload[key])
            continue
        value = decode_json_field(payload[key], default)
        if isinstance(default, list) and not isinstance(value, list):
            value = _empty_like(default)
        elif isinstance(default, dict) and not isinstance(value, dict):
            value = _empty_like(default)
        data[key] = value
    return data


def load_latest(store: RecordStore, model: type[Base], key: dict[str, Any]) -> Optional[dict[str, Any]]:
    rows = store.select(model, key, order_by="updated_at", descending=True, limit=2)
    if not rows:
        return None
    if len(rows) > 1:
        logger.warning("more than one live %s record for %s, using the newest", model.__tablename__, key)
    return rows[0]


def save_single_record(
    store: RecordStore,
    model: type[Base],
    key: dict[str, Any],
    values: dict[str, Any],
    conflict_keys: Optional[Sequence[str]] = None,
) -> dict[str, Any]:
    """Persist one live record for ``key``.

    With ``conflict_keys`` this is a single upsert. Without, the existing
    record is selected first and updated, otherwise a new one is inserted;
    two concurrent saves can both miss the select and insert twice.
    """
    if conflict_keys:
        return store.upsert(model, {**key, **values}, conflict_keys)

    existing = load_latest(store, model, key)
    if existing:
        store.update(model, {"id": existing["id"]}, values)
        return {**existing, **values}
    return store.insert(model, {**key, **values})


@dataclass(frozen=True)
class FormSpec:
    namespace: str
    initial: dict[str, Any]
    parse: Optional[Callable[[dict[str, Any]], dict[str, Any]]] = None
    transform: Optional[Callable[[dict[str, Any]], dict[str, Any]]] = None
    conflict_key: Optional[tuple[str, ...]] = ANSWER_CONFLICT_KEY
    step_number: Optional[int] = None
    step_name: str = ""
    next_step_number: Optional[int] = None
    next_step_name: str = ""

    def parse_payload(self, payload: dict[str, Any]) -> dict[str, Any]:
        if self.parse:
            try:
                return self.parse(payload)
            except (KeyError, TypeError, ValueError):
                logger.warning("could not parse %s payload, using defaults", self.namespace)
                return copy.deepcopy(self.initial)
        return default_parse(self.initial, payload)

    def dump(self, data: dict[str, Any]) -> dict[str, Any]:
        if self.transform:
            return self.transform(data)
        return {key: data.get(key, default) for key, default in self.initial.items()}


class StepForm:
    def __init__(
        self,
        session: ProgramSession,
        spec: FormSpec,
        discriminator: str = "",
        on_complete: Optional[Callable[[], Any]] = None,
    ):
        self.session = session
        self.spec = spec
        self.discriminator = discriminator
        self.on_complete = on_complete
        self.data: dict[str, Any] = copy.deepcopy(spec.initial)
        self.record_id: Optional[int] = None
        self.error: Optional[str] = None
        self.loaded = False

    @property
    def key(self) -> dict[str, Any]:
        return {
            "namespace": self.spec.namespace,
            "user_id": self.session.user_id,
            "discriminator": self.discriminator,
        }

    def load(self) -> dict[str, Any]:
        try:
            record = load_latest(self.session.store, StepAnswer, self.key)
        except StoreError as exc:
            self.error = str(exc)
            self.session.notify("Error", "Failed to load your data", level="error")
            return self.data

        self.loaded = True
        self.error = None
        if record is None:
            return self.data

        payload = loads_json(record["payload_json"], {})
        if not isinstance(payload, dict):
            payload = {}
        self.record_id = record["id"]
        self.data = self.spec.parse_payload(payload)
        return self.data

    def update(self, field_name: str, value: Any) -> None:
        if field_name not in self.spec.initial:
            raise KeyError(field_name)
        self.data[field_name] = value

    def update_many(self, values: dict[str, Any]) -> None:
        for field_name, value in values.items():
            self.update(field_name, value)

    def submit(self) -> bool:
        payload = self.spec.dump(self.data)
        values = {"payload_json": json.dumps(payload, ensure_ascii=False, default=str)}
        store = self.session.store
        try:
            record = save_single_record(store, StepAnswer, self.key, values, self.spec.conflict_key)
            if self.spec.step_number:
                record_completion(
                    store, self.session.user_id, self.spec.step_number, self.spec.step_name
                )
                if self.spec.next_step_number:
                    record_unlock(
                        store, self.session.user_id, self.spec.next_step_number, self.spec.next_step_name
                    )
        except StoreError:
            self.session.notify("Error", "Failed to save your response", level="error")
            return False

        self.record_id = record["id"]
        self.session.notify("Success", "Your response has been saved")
        if self.on_complete:
            self.on_complete()
        return True


class FormContent:
    """Content provider that mounts a ``StepForm`` for a catalog step."""

    def __init__(self, spec: FormSpec):
        self.spec = spec

    def __call__(self, session: ProgramSession, on_complete: Optional[Callable[[], Any]] = None) -> StepForm:
        return StepForm(session, self.spec, on_complete=on_complete)
