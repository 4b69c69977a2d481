from rich.console import Console

from wallet_panel.notifications import NotificationSink


class ConsoleNotificationSink(NotificationSink):
    """Prints connection and transfer outcomes to the terminal."""

    def __init__(self, console: Console):
        self.console = console

    def notify_success(self, message: str, detail: str = "") -> None:
        suffix = f" [dim]{detail}[/dim]" if detail else ""
        self.console.print(f"[green]✔ {message}[/green]{suffix}")

    def notify_failure(self, message: str, detail: str = "") -> None:
        suffix = f" [dim]{detail}[/dim]" if detail else ""
        self.console.print(f"[red]✘ {message}[/red]{suffix}")
