"""Generator settings"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class GeneratorConfig:
    """Settings shared by every file emitted in one run"""
    out: Path = Path("generated")
    root: Path = Path(".")
    extension: str = ".ts"
    base_module: str = "@coconut/coconut"
    base_alias: str = "coconut"
    indent: str = "    "

    def __post_init__(self):
        self.out = Path(self.out)
        self.root = Path(self.root)
        if not self.extension.startswith("."):
            self.extension = f".{self.extension}"
