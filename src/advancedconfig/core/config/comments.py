"""
Rewrite of synthetic comment keys into real YAML comments.

Files written by older releases store each comment as an extra entry named
``<key>_COMMENT_`` next to the value it describes. This pass turns those
lines into ``#`` comment lines at the same indentation. It works on a copy
(``<name>.old.yml``) of the file, streams it back over the original and
removes the copy afterwards. Failures are logged and never raised.
"""

from __future__ import annotations

from pathlib import Path
import shutil
from typing import Union

import yaml

from advancedconfig.core.utils.logger import log_debug, log_error, log_file_operation

from .document import COMMENT_IDENTIFIER

OLD_SUFFIX = ".old"


def old_file_path(config_file: Path) -> Path:
    return config_file.with_name(f"{config_file.stem}{OLD_SUFFIX}{config_file.suffix}")


def _unquote(text: str) -> str:
    if text[:1] not in ("'", '"'):
        return text
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError:
        return text
    return value if isinstance(value, str) else text


def rewrite_line(line: str, marker: str = COMMENT_IDENTIFIER) -> str:
    """Turn ``  key_COMMENT_: text`` into ``  # text``; other lines pass through."""
    key = line.split(":", 1)[0].replace(" ", "")
    if marker not in key or key.startswith("#"):
        return line
    indent = len(line) - len(line.lstrip(" "))
    text = line.split(":", 1)[1].strip() if ":" in line else ""
    return f"{' ' * indent}# {_unquote(text)}".rstrip()


def replace_comments(config_file: Union[str, Path], marker: str = COMMENT_IDENTIFIER) -> bool:
    """
    Rewrite synthetic comment keys in ``config_file`` in place.

    Args:
        config_file: The YAML file to rewrite
        marker: Suffix identifying synthetic comment keys

    Returns:
        True if the file was rewritten, False if there was nothing to do or
        the rewrite failed.
    """
    config_file = Path(config_file)
    try:
        text = config_file.read_text(encoding="utf-8")
    except OSError as exc:
        log_error("comments", f"Could not read {config_file}", exception=exc)
        return False
    if marker not in text:
        log_debug("comments", "No synthetic comment keys found", str(config_file))
        return False

    old_file = old_file_path(config_file)
    try:
        shutil.copyfile(config_file, old_file)
        with old_file.open(encoding="utf-8") as reader, config_file.open(
            "w", encoding="utf-8"
        ) as writer:
            for line in reader:
                writer.write(rewrite_line(line.rstrip("\r\n"), marker) + "\n")
    except OSError as exc:
        # The copy is kept so a half-written file can be recovered by hand.
        log_error(
            "comments",
            f"Failed to rewrite comments in {config_file}",
            context=f"backup={old_file}",
            exception=exc,
        )
        return False

    try:
        old_file.unlink()
    except OSError as exc:
        log_file_operation("delete", str(old_file), False, str(exc))
    log_file_operation("rewrite", str(config_file), True)
    return True
