"""View objects the controller renders into.

A view holds every interactive region of the page: the idea input, the model
selector, the generate trigger, the results area with its two output regions,
their copy controls, and the toast.
"""
from __future__ import annotations
import base64
import sys
from abc import ABC, abstractmethod
from typing import Callable, TextIO

SHORT_OUTPUT = "short-output"
DETAILED_OUTPUT = "detailed-output"

LOADING_TEXT = "Generating prompt..."
IDLE_TEXT = {
    SHORT_OUTPUT: "Your short prompt will appear here.",
    DETAILED_OUTPUT: "Your detailed prompt will appear here.",
}
GENERATE_LABEL = "Generate"
WORKING_LABEL = "Working..."


class View(ABC):
    @abstractmethod
    def idea_text(self) -> str: ...

    @abstractmethod
    def set_idea(self, text: str) -> None: ...

    @abstractmethod
    def focus_idea(self) -> None: ...

    @abstractmethod
    def selected_model(self) -> str: ...

    @abstractmethod
    def select_model(self, model: str) -> None:
        """Apply a model selection without firing change listeners."""

    @abstractmethod
    def model_label(self) -> str: ...

    @abstractmethod
    def on_model_change(self, callback: Callable[[str], None]) -> None: ...

    @abstractmethod
    def show_results(self, model_label: str) -> None: ...

    @abstractmethod
    def set_output(self, target: str, text: str, loading: bool = False) -> None: ...

    @abstractmethod
    def output_text(self, target: str) -> str: ...

    @abstractmethod
    def set_trigger(self, enabled: bool, label: str) -> None: ...

    @abstractmethod
    def trigger_enabled(self) -> bool: ...

    @abstractmethod
    def scroll_to_results(self) -> None: ...

    @abstractmethod
    def write_clipboard(self, text: str) -> None: ...

    @abstractmethod
    def set_copied(self, target: str, copied: bool) -> None: ...

    @abstractmethod
    def show_toast(self, message: str) -> None: ...

    @abstractmethod
    def hide_toast(self) -> None: ...


class TerminalView(View):
    """In-memory view that prints finished outputs to a stream."""

    def __init__(self, models: dict[str, str], out: TextIO | None = None) -> None:
        if not models:
            raise ValueError("TerminalView needs at least one model")
        self.models = models
        self.out = out or sys.stdout
        self._idea = ""
        self._model = next(iter(models))
        self._listeners: list[Callable[[str], None]] = []
        self._outputs = dict(IDLE_TEXT)
        self._enabled = True
        self._label = GENERATE_LABEL

    def idea_text(self) -> str:
        return self._idea

    def set_idea(self, text: str) -> None:
        self._idea = text

    def focus_idea(self) -> None:
        pass

    def selected_model(self) -> str:
        return self._model

    def select_model(self, model: str) -> None:
        self._model = model

    def change_model(self, model: str) -> None:
        """User-initiated selection; notifies listeners."""
        self._model = model
        for callback in self._listeners:
            callback(model)

    def model_label(self) -> str:
        return self.models.get(self._model, self._model)

    def on_model_change(self, callback: Callable[[str], None]) -> None:
        self._listeners.append(callback)

    def show_results(self, model_label: str) -> None:
        print(f"Generating with {model_label}...", file=self.out)

    def set_output(self, target: str, text: str, loading: bool = False) -> None:
        self._outputs[target] = text
        if not loading:
            title = "Short prompt" if target == SHORT_OUTPUT else "Detailed prompt"
            print(f"\n== {title} ==\n{text}", file=self.out)

    def output_text(self, target: str) -> str:
        return self._outputs.get(target, "")

    def set_trigger(self, enabled: bool, label: str) -> None:
        self._enabled = enabled
        self._label = label

    def trigger_enabled(self) -> bool:
        return self._enabled

    def scroll_to_results(self) -> None:
        self.out.flush()

    def write_clipboard(self, text: str) -> None:
        # OSC 52: ask the terminal emulator to set the system clipboard.
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        self.out.write(f"\x1b]52;c;{encoded}\x07")
        self.out.flush()

    def set_copied(self, target: str, copied: bool) -> None:
        if copied:
            print("Copied!", file=self.out)

    def show_toast(self, message: str) -> None:
        print(message, file=sys.stderr)

    def hide_toast(self) -> None:
        pass
