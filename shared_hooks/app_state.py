# shared_hooks/app_state.py
import os
from rich.console import Console
from prompt_toolkit import PromptSession
from prompt_toolkit.styles import Style as PromptStyle
from typing import Dict, Any, Optional


class AppState:
    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        # Only built when a confirmation is actually needed, so
        # non-interactive runs (CI, --overwrite skip/always) never touch the terminal.
        self._prompt_session: Optional[PromptSession] = None
        self.RUNTIME_OVERRIDES: Dict[str, Any] = {}
        self.DEBUG = os.getenv("SHARED_HOOKS_DEBUG", "false").lower() == "true"

    @property
    def prompt_session(self) -> PromptSession:
        if self._prompt_session is None:
            self._prompt_session = PromptSession(
                style=PromptStyle.from_dict({
                    'prompt': '#ffaa00 bold',
                })
            )
        return self._prompt_session

    @prompt_session.setter
    def prompt_session(self, session: PromptSession):
        self._prompt_session = session
