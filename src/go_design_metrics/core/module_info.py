"""Module metadata: reading the module identity from go.mod."""

from pathlib import Path

from loguru import logger

from ..config.defaults import GO_MOD_FILE


def read_module_name(module_root: Path) -> str:
    """Read the module path declared in `<module_root>/go.mod`.

    Handles quoted module paths and trailing `//` comments.

    Args:
        module_root: Module root directory

    Returns:
        Declared module path, or "" if go.mod is missing, unreadable or has
        no module directive
    """
    go_mod = Path(module_root) / GO_MOD_FILE
    try:
        content = go_mod.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Cannot read {go_mod}: {e}")
        return ""

    for line in content.splitlines():
        line = line.split("//", 1)[0].strip()
        if line.startswith("module ") or line.startswith("module\t"):
            name = line[len("module") :].strip().strip('"`')
            if name:
                return name

    logger.debug(f"No module directive found in {go_mod}")
    return ""
