import sys
from pathlib import Path

# Make 'src' importable when the package has not been installed
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))
