"""On-device key/value storage for the cart.

``LocalStorage`` keeps string values in a single JSON file, the way a browser
keeps its local storage per origin. ``CartStorage`` is the cart's view of it:
it knows the keys, and it validates records on the way back in.
"""

import json
import os
import tempfile
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from storefront.models import CartItem, Discount

logger = structlog.get_logger(__name__)

CART_KEY = "sasya-mantra-cart"
DISCOUNT_KEY = "sasya-mantra-discount"
SESSION_KEY = "sasya-mantra-session"

DEFAULT_STORAGE_PATH = Path.home() / ".sasya-mantra" / "storage.json"

_items_adapter = TypeAdapter(list[CartItem])


def default_storage_path() -> Path:
    override = os.environ.get("SASYA_STORAGE_PATH")
    return Path(override).expanduser() if override else DEFAULT_STORAGE_PATH


class LocalStorage:
    def __init__(self, path=None):
        self.path = Path(path) if path is not None else default_storage_path()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("storage_unreadable", path=str(self.path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("storage_unreadable", path=str(self.path), error="not a JSON object")
            return {}
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file and swap it in, so readers never see a
        # half-written file.
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        self._write({})


class CartLoadError(Exception):
    """Persisted cart data exists but cannot be used."""


class CartStorage:
    def __init__(self, storage: LocalStorage | None = None):
        self.storage = storage if storage is not None else LocalStorage()

    def load_items(self) -> list[CartItem]:
        raw = self.storage.get_item(CART_KEY)
        if raw is None:
            return []
        try:
            return _items_adapter.validate_json(raw)
        except ValidationError as exc:
            raise CartLoadError(f"invalid cart items: {exc.error_count()} error(s)") from exc

    def load_discount(self) -> Discount:
        raw = self.storage.get_item(DISCOUNT_KEY)
        if raw is None:
            return Discount.none()
        try:
            return Discount.model_validate_json(raw)
        except ValidationError as exc:
            raise CartLoadError(f"invalid discount: {exc.error_count()} error(s)") from exc

    def save(self, items: list[CartItem], discount: Discount) -> None:
        self.storage.set_item(CART_KEY, _items_adapter.dump_json(items).decode("utf-8"))
        if discount.is_active:
            self.storage.set_item(DISCOUNT_KEY, discount.model_dump_json())
        else:
            self.storage.remove_item(DISCOUNT_KEY)

    def clear(self) -> None:
        self.storage.remove_item(CART_KEY)
        self.storage.remove_item(DISCOUNT_KEY)
