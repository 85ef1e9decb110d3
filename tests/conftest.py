from pathlib import Path
import types

import pytest

GRAMMARS = Path(__file__).parent / "grammars"


@pytest.fixture
def grammar_path():
    def _path(name: str) -> str:
        return str(GRAMMARS / name)
    return _path


@pytest.fixture
def load_module():
    """Execute generated Python source as a fresh module."""
    def _load(src: str, name: str = "generated_parser") -> types.ModuleType:
        mod = types.ModuleType(name)
        exec(compile(src, f"<{name}>", "exec"), mod.__dict__)
        return mod
    return _load
