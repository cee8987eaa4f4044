from dataclasses import dataclass


@dataclass(frozen=True)
class Ruleset:
    # Setup turns may stack both workers on one cell when True.
    allow_stacked_setup: bool = False
    # Turns that break the Construction.can_move climb table are neither
    # generated nor accepted when True.
    enforce_climb_limit: bool = True
