"""Configuration for mdsurface.

:class:`EditorConfig` is a plain dataclass that captures every tuneable
knob of the conversion pipeline and the editing session.  Instances are
passed to both :class:`MarkdownToMarkupConverter` and
:class:`MarkdownEditor`.
"""

from __future__ import annotations

import codecs
import dataclasses
from dataclasses import dataclass
from typing import Any

DEFAULT_SAVE_FILENAME = "document.md"
"""Download name offered by :meth:`MarkdownEditor.save`."""

DEFAULT_SAVE_MEDIA_TYPE = "text/markdown"
"""MIME type of the saved blob."""


@dataclass
class EditorConfig:
    """Complete configuration for a conversion pipeline or editor session.

    Every parameter has a default, so ``EditorConfig()`` is always valid.

    Parameters
    ----------
    tab_text:
        Text inserted at the caret when the Tab key is pressed.  Must be
        non-empty and must not contain a newline.
    save_filename:
        File name attached to the blob produced by
        :meth:`MarkdownEditor.save`.
    save_media_type:
        MIME type attached to the saved blob.
    save_encoding:
        Codec used to encode the saved blob.
    log_level:
        Level applied to the ``mdsurface`` loggers when a session or
        converter is created.
    metrics:
        Optional :class:`~mdsurface.observability.MetricsHook`.  When
        ``None`` a :class:`NoopMetricsHook` is used.
    debug_dump_blocks:
        Write the classified block list to *stderr* on each conversion.
    debug_dump_markup:
        Write the rendered markup to *stderr* on each conversion.
    """

    # ── Editing ─────────────────────────────────────────────────────────
    tab_text: str = "  "

    # ── Save ────────────────────────────────────────────────────────────
    save_filename: str = DEFAULT_SAVE_FILENAME

    save_media_type: str = DEFAULT_SAVE_MEDIA_TYPE

    save_encoding: str = "utf-8"

    # ── Observability ──────────────────────────────────────────────────
    log_level: int | str = "WARNING"

    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_blocks: bool = False

    debug_dump_markup: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.tab_text:
            raise ValueError("tab_text must not be empty")
        if "\n" in self.tab_text or "\r" in self.tab_text:
            raise ValueError(f"tab_text must not contain a newline, got {self.tab_text!r}")
        if not self.save_filename or any(sep in self.save_filename for sep in ("/", "\\")):
            raise ValueError(
                f"save_filename must be a bare file name, got {self.save_filename!r}"
            )
        if "/" not in self.save_media_type:
            raise ValueError(
                f"save_media_type must look like 'type/subtype', got {self.save_media_type!r}"
            )
        try:
            codecs.lookup(self.save_encoding)
        except LookupError as exc:
            raise ValueError(f"save_encoding is not a known codec: {self.save_encoding!r}") from exc

    def __repr__(self) -> str:
        """Show only the fields that differ from their defaults."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.default is not dataclasses.MISSING and val == f.default:
                continue
            parts.append(f"{f.name}={val!r}")
        return f"EditorConfig({', '.join(parts)})"
