"""
Export options.

``ExportOptions`` holds the configured defaults, ``ExportOverrides`` the
values supplied for one export call. ``resolve_options`` combines them field
by field: an override that is set replaces the default entirely.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Optional

from treezip.constants import (
    DEFAULT_BUTTON_LABEL,
    DEFAULT_FILENAME_PREFIX,
    DEFAULT_OUTPUT_DIR,
)
from treezip.tree.classifier import BinaryOverride

FilenameFn = Callable[[Any], str]
DoneFn = Callable[[], None]
ErrorFn = Callable[[BaseException], None]


@dataclass(frozen=True)
class ExportOptions:
    """Configured export defaults

    Attributes:
        add_export_btn: Whether a front end should offer an export trigger
        btn_label: Label of that trigger
        filename_pfx: Prefix of generated archive names
        filename: Function computing the full archive name from the context
        done: Called without arguments after a successful export
        on_error: Called with the error when an export fails, logs when unset
        root: Tree to export (node or plain value), built-in template when unset
        is_binary: Replaces binary detection, called as is_binary(content, name)
        output_dir: Directory archives are saved to
    """

    add_export_btn: bool = True
    btn_label: str = DEFAULT_BUTTON_LABEL
    filename_pfx: str = DEFAULT_FILENAME_PREFIX
    filename: Optional[FilenameFn] = None
    done: Optional[DoneFn] = None
    on_error: Optional[ErrorFn] = None
    root: Optional[Any] = None
    is_binary: Optional[BinaryOverride] = None
    output_dir: str = DEFAULT_OUTPUT_DIR

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], **kwargs) -> "ExportOptions":
        """
        Build options from persisted settings.

        Args:
            settings: Values loaded from settings.json
            **kwargs: Values that take precedence over the settings

        Returns:
            ExportOptions: Combined options
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in settings.items() if key in known}
        values.update(kwargs)
        return cls(**values)


@dataclass(frozen=True)
class ExportOverrides:
    """Values supplied for a single export call"""

    on_error: Optional[ErrorFn] = None
    root: Optional[Any] = None
    filename: Optional[FilenameFn] = None
    done: Optional[DoneFn] = None
    filename_pfx: Optional[str] = None
    output_dir: Optional[str] = None


def resolve_options(
    defaults: ExportOptions, overrides: Optional[ExportOverrides] = None
) -> ExportOptions:
    """
    Combine defaults with per-call overrides.

    Args:
        defaults: Configured options
        overrides: Per-call values, fields that are None or empty strings
            keep the default

    Returns:
        ExportOptions: Effective options for the call
    """
    if overrides is None:
        return defaults

    changes = {}
    for field_def in fields(ExportOverrides):
        value = getattr(overrides, field_def.name)
        if value is None or value == "":
            continue
        changes[field_def.name] = value
    return replace(defaults, **changes)
