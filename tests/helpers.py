"""Test doubles and tree builders"""

from pathlib import Path
from typing import Dict, List

from classmap.core.errors import LoadFailure


class RecordingRuntime:
    """Host runtime double that records every load request"""

    def __init__(self, loaded=None, fail=False, result=True):
        self.loaded = set(loaded or [])
        self.calls: List[Path] = []
        self.fail = fail
        self.result = result

    def is_loaded(self, name: str) -> bool:
        return name in self.loaded

    def load_file(self, path: Path) -> bool:
        self.calls.append(Path(path))
        if self.fail:
            raise LoadFailure(f"cannot load {path}")
        return self.result


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root
