import random
import sys
from pathlib import Path

import pytest

# módulos ficam na raiz do projeto (layout plano)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def rng():
    return random.Random(1234)
