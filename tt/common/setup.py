import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories, erroring out when a file is in the way.
def ensure_directory(path: Path):
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    path.mkdir(parents=True,exist_ok=True)
    return path

# Works out where user-specific data lives. TIMETAP_HOME always wins, then the platform convention.
def _data_root() -> Path:
    override = os.getenv("TIMETAP_HOME")
    if override:
        return Path(override)
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / "TimeTap"
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "timetap"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    root: Path
    data: Path
    logs: Path
    settings: Path

    @staticmethod
    def build():
        # Folder for the source/install itself, no user-specific files
        root = Path(__file__).resolve().parents[2]

        # Folder for all timetap user-specific stuff
        data = ensure_directory(_data_root())
        logs = ensure_directory(data / "logs")

        return ProjectPaths(
            root = root,
            data = data,
            logs = logs,
            settings = data / "settings.json",
        )
PATHS = ProjectPaths.build()
