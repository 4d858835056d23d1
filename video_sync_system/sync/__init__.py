"""
Control channel: playback commands in, session status broadcasts out.
"""

from .hub import SyncHub
from .messages import ControlCommand, PlayCommand, PauseCommand, SeekCommand, StopCommand, StatusUpdate, parse_command

__all__ = ["SyncHub", "ControlCommand", "PlayCommand", "PauseCommand", "SeekCommand", "StopCommand", "StatusUpdate", "parse_command"]
