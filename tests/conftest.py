import io
import sys
from pathlib import Path

import pytest
from hypothesis import settings
from rich.console import Console

# Ensure src/ is importable when running tests without installing.
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from gopin_core.report import Reporter  # noqa: E402

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("gopin-tests", database=None)
settings.load_profile("gopin-tests")


def _buffer_console() -> Console:
    return Console(file=io.StringIO(), width=200, soft_wrap=True, highlight=False, emoji=False, markup=False)


@pytest.fixture
def reporter() -> Reporter:
    """Reporter whose stdout/stderr land in StringIO buffers (``.out.file`` / ``.err.file``)."""
    return Reporter(out=_buffer_console(), err=_buffer_console())
