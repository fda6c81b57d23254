"""Decision strategies for players.

Available strategies:
- GreedyBot: Automated play that minimises collected points
- HumanStrategy: Forwards each decision to a person over a game channel
"""

from parade.strategies.base import BaseStrategy
from parade.strategies.greedy_bot import GreedyBot
from parade.strategies.human import HumanStrategy

__all__ = ["BaseStrategy", "GreedyBot", "HumanStrategy"]
