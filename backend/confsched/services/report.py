from __future__ import annotations

import os
from pathlib import Path
import tempfile

import numpy as np

from confsched.core.exceptions import ReportWriteError
from confsched.services.catalogue import RoomCatalogue, SessionCatalogue


def render_report(
    schedule: np.ndarray,
    score: float,
    sessions: SessionCatalogue,
    rooms: RoomCatalogue,
) -> str:
    nmini = len(sessions)
    lines = [f"# Conference schedule with score {score:g}", ""]
    for slot, row in enumerate(schedule):
        lines.append(f"|Slot {slot}|   |   |   |")
        lines.append("|---|---|---|---|")
        for room, cell in enumerate(row):
            session_id = int(cell)
            if session_id >= nmini:
                continue
            session = sessions[session_id]
            lines.append(f"|{session.full_title}|{session.theme}|{session.priority}|{rooms.name(room)}|")
        lines.append("")
    return "\n".join(lines) + "\n"


def write_report(
    path: str | Path,
    schedule: np.ndarray,
    score: float,
    sessions: SessionCatalogue,
    rooms: RoomCatalogue,
) -> Path:
    target = Path(path)
    # Render everything before touching the destination.
    content = render_report(schedule, score, sessions, rooms)
    temp_name: str | None = None
    try:
        # Replace the destination only once the new report is fully on disk.
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False
        ) as handle:
            temp_name = handle.name
            handle.write(content)
        os.replace(temp_name, target)
    except OSError as exc:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise ReportWriteError(str(target), exc.strerror or str(exc)) from exc
    return target
