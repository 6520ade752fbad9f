from .bash import BashCommandHandler
from .computer import ComputerUseHandler

__all__ = ["BashCommandHandler", "ComputerUseHandler"]
