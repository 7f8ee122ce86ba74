"""
Crazy Eights, human against computer.

The rule engine lives in :mod:`crazyeights.game`; :mod:`crazyeights.engine`
drives a game for a presentation layer through :mod:`crazyeights.adapters`.
"""

__version__ = "0.1.0"
