"""
Elf Invaders test suite.

    pytest tests/                 # everything
    pytest tests/ -m "not slow"   # skip the long seeded runs

The simulation tests never open a window; renderer tests draw onto
off-screen surfaces.
"""

# pygame warns about pkg_resources on import (pygame issue #4557)
import warnings
warnings.filterwarnings("ignore", category=UserWarning, module="pygame.pkgdata")
