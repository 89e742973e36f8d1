"""Nudge the editor into persisting its in-memory UI state.

The editor flushes workbench state to ``state.vscdb`` when its window loses
focus. Bouncing focus to another application and back is the only
reliable trigger available from outside the editor process.
"""

from __future__ import annotations

import subprocess
import sys
import time

import structlog

from vctx.config.models import RefreshConfig

log = structlog.get_logger()

_OSASCRIPT_TIMEOUT_SEC = 5.0


def _activate(app: str) -> None:
    subprocess.run(
        ["osascript", "-e", f'tell application "{app}" to activate'],
        check=True,
        capture_output=True,
        timeout=_OSASCRIPT_TIMEOUT_SEC,
    )


def attempt_state_refresh(config: RefreshConfig | None = None) -> bool:
    """Bounce focus away from the editor and back, then wait for the flush.

    Best-effort and never retried. Returns False on platforms without
    AppleScript or when either activation fails.
    """
    config = config or RefreshConfig()
    if sys.platform != "darwin":
        log.debug("state_refresh_unsupported", platform=sys.platform)
        return False

    try:
        _activate(config.bounce_app)
        _activate(config.editor_app)
    except (OSError, subprocess.SubprocessError) as e:
        log.debug("state_refresh_failed", error=str(e))
        return False

    time.sleep(config.settle_delay_sec)
    return True
