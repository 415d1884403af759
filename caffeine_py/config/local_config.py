"""Local configuration management (.caffeine_py.local)."""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import List, Optional


CONFIG_FILENAME = ".caffeine_py.local"


def _default_solutions() -> List[str]:
    return ["a", "b", "c", "d", "e", "f"]


@dataclass
class ContestConfig:
    """
    Local configuration for a contest working folder.
    Stored at .caffeine_py.local in the project directory.
    Filename templates may contain the <problem> and <num> placeholders.
    """

    template_location: str = "template.cpp"
    default_solutions: List[str] = field(default_factory=_default_solutions)
    solution_filename: str = "<problem>.cpp"
    testcase_filename: str = "<problem><num>.txt"
    # Seconds between two passes over all watched users.
    poll_delay: float = 10.0
    # Seconds between two watched users within a pass.
    intra_poll_delay: float = 1.0
    executable: str = "caffeine"
    contest_id: Optional[int] = None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Optional["ContestConfig"]:
        """
        Load local config from file.
        If path is not specified, searches upward from current directory.
        """
        if path is None:
            path = cls.find_config()

        if path is None or not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            known = {f.name for f in fields(cls)}
            return cls(**{k: v for k, v in data.items() if k in known})
        except (json.JSONDecodeError, IOError, TypeError, AttributeError):
            return None

    @classmethod
    def load_or_default(cls, path: Optional[Path] = None) -> "ContestConfig":
        config = cls.load(path)
        return config if config is not None else cls()

    def save(self, path: Optional[Path] = None) -> Path:
        """Save local config to file."""
        if path is None:
            path = self.find_config() or Path.cwd() / CONFIG_FILENAME

        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2, ensure_ascii=False)
        return path

    @staticmethod
    def find_config(start: Optional[Path] = None) -> Optional[Path]:
        """
        Search for .caffeine_py.local starting from ``start`` (default: the
        current directory), walking up to root.
        """
        current = (start or Path.cwd()).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return config_path

            # Check if we've reached the root
            if current == current.parent:
                return None

            current = current.parent
