"""Compatibility helpers for importing and opening piecash books."""

from __future__ import annotations

import inspect
import warnings
from pathlib import Path
from urllib.parse import urlparse

from sqlalchemy.exc import SAWarning

_PIECASH = None


def _patch_sqlalchemy_for_piecash() -> None:
    """Drop the ``constructor`` argument newer SQLAlchemy rejects."""
    try:
        from sqlalchemy.orm import decl_api
    except ImportError:
        return

    generate_base = decl_api.registry.generate_base
    params = inspect.signature(generate_base).parameters
    if "constructor" in params or getattr(generate_base, "_piecash_patched", False):
        return

    def _generate_base(self, *args, **kwargs):
        kwargs.pop("constructor", None)
        return generate_base(self, *args, **kwargs)

    _generate_base._piecash_patched = True  # type: ignore[attr-defined]
    decl_api.registry.generate_base = _generate_base


def load_piecash():
    """Import piecash once, with compatibility patches applied."""
    global _PIECASH
    if _PIECASH is None:
        _patch_sqlalchemy_for_piecash()
        warnings.filterwarnings("ignore", category=SAWarning)
        import piecash

        _PIECASH = piecash
    return _PIECASH


def split_book_location(book_path: Path | str) -> tuple[str | None, str | None]:
    """Return ``(sqlite_file, uri)`` for a book path or database URI."""
    if isinstance(book_path, Path):
        return str(book_path), None
    parsed = urlparse(book_path)
    if parsed.scheme and parsed.scheme != "file":
        return None, book_path
    if parsed.scheme == "file":
        book_path = parsed.path
    return str(Path(book_path).expanduser().resolve()), None


def open_piecash_book(piecash, book_path: Path | str):
    """Open a book read-only, even when GnuCash holds its lock."""
    sqlite_file, uri = split_book_location(book_path)
    open_book = piecash.open_book
    params = inspect.signature(open_book).parameters
    accepts_kwargs = any(
        param.kind is inspect.Parameter.VAR_KEYWORD for param in params.values()
    )
    if accepts_kwargs or "sqlite_file" in params or "uri_conn" in params:
        return open_book(
            sqlite_file=sqlite_file,
            uri_conn=uri,
            readonly=True,
            open_if_lock=True,
            check_exists=False,
        )
    return open_book(
        sqlite_file or uri,
        readonly=True,
        open_if_lock=True,
        check_exists=False,
    )


__all__ = ["load_piecash", "open_piecash_book", "split_book_location"]
