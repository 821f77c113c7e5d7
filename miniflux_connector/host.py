"""Host callbacks the Miniflux connector reports to."""

import json
import sys
from abc import ABC, abstractmethod
from typing import TextIO

from .models import DisplayItem


class Host(ABC):
    """Signals the timeline host exposes to a connector."""

    @abstractmethod
    def report_items(self, items: list[DisplayItem]) -> None:
        """Hand over the loaded items, in display order."""

    @abstractmethod
    def report_verified(self, display_name: str) -> None:
        """Confirm the configuration works, naming the connection."""

    @abstractmethod
    def report_error(self, message: str) -> None:
        """Show a user-facing error message."""


class ConsoleHost(Host):
    """Host that writes JSON to stdout and errors to stderr."""

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def report_items(self, items: list[DisplayItem]) -> None:
        payload = [item.to_dict() for item in items]
        self.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")

    def report_verified(self, display_name: str) -> None:
        self.stdout.write(json.dumps({"displayName": display_name}) + "\n")

    def report_error(self, message: str) -> None:
        self.stderr.write(f"Error: {message}\n")
