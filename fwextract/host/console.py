"""
Console stand-in for the host's dialogs, used by the command line.
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.logger import get_logger
from ..core.models import MessageIcon
from .base import Interaction

logger = get_logger(__name__)


class ConsoleInteraction(Interaction):
    """Answers save prompts from a preset path and prints messages."""

    def __init__(self, output: Optional[str] = None, output_dir: str = ".", stream=None):
        self.output = output
        self.output_dir = output_dir
        self.stream = stream or sys.stderr
        self.messages: List[Tuple[str, str, MessageIcon]] = []

    def prompt_save_path(
        self, title: str, default_extension: str, default_filename: str
    ) -> Optional[str]:
        if self.output:
            path = self.output
        else:
            path = str(Path(self.output_dir) / default_filename)
        logger.debug(f"{title}: using {path}")
        return path

    def show_message(self, title: str, body: str, icon: MessageIcon = MessageIcon.INFO):
        self.messages.append((title, body, icon))
        print(f"[{icon.value}] {title}: {body}", file=self.stream)
