"""
Balanced team generation for pickup games.

Exposes a callable API used by the FastAPI layer and a minimal CLI
(`python -m teamgen.cli`) for running a request file by hand.
"""

from .errors import (  # noqa: F401
    ConfigurationError,
    InfeasibleConstraints,
    InvalidRequest,
    TeamGenerationError,
)
from .generator import generate_teams  # noqa: F401
from .models import Player, Team, TeamAssignment  # noqa: F401
