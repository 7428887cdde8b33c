"""
Console UI

Blocking alert / prompt / confirm dialogs and album list rendering on a
terminal. CatalogApp only depends on the CatalogUI protocol, so tests swap
in a scripted implementation.
"""

from typing import Any, Callable, Dict, Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class CatalogUI(Protocol):
    """Dialogs the client application needs from its user interface"""

    def alert(self, message: str) -> None:
        ...

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        """Return the entered text, or None when the user cancels"""
        ...

    def confirm(self, message: str) -> bool:
        ...


class ConsoleUI:
    """CatalogUI on stdin/stdout"""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
        assume_yes: bool = False,
    ):
        self._input = input_func
        self._output = output_func
        self.assume_yes = assume_yes

    def alert(self, message: str) -> None:
        self._output(f"! {message}")

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        suffix = f" [{default}]" if default else ""
        try:
            answer = self._input(f"{message}{suffix} ")
        except EOFError:
            return None
        return answer if answer else default

    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        try:
            answer = self._input(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")

    def render_albums(self, albums: Iterable[Dict[str, Any]]) -> None:
        albums = list(albums)
        for album in albums:
            self._output(format_album(album))
        self._output(f"{len(albums)} results")


def format_album(album: Dict[str, Any]) -> str:
    cover = album.get("coverUrl") or "no cover"
    return (
        f"#{album.get('id')}  {album.get('band')} - {album.get('title')}"
        f"  ({album.get('year')}, {album.get('genre')})  {cover}"
    )
