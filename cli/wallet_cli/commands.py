from typing import List, Optional, Dict, Callable, Awaitable
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Prompt

from wallet_panel.display import estimate_fiat_value, format_balance
from wallet_panel.provider_registry import ProviderRegistry
from wallet_panel.session import WalletSession
from .config import ConfigManager


class CommandContext:
    def __init__(self, session: WalletSession, console: Console, config: ConfigManager,
                 providers: ProviderRegistry):
        self.session = session
        self.console = console
        self.config = config
        self.providers = providers


CommandHandler = Callable[[CommandContext, List[str]], Awaitable[None]]


class CommandRegistry:
    def __init__(self):
        self.commands: Dict[str, Dict[str, any]] = {}

    def register(self, name: str, description: str, handler: CommandHandler):
        self.commands[name] = {
            "description": description,
            "handler": handler
        }

    def get_command(self, name: str) -> Optional[CommandHandler]:
        cmd = self.commands.get(name)
        return cmd["handler"] if cmd else None

    def get_all_commands(self) -> Dict[str, str]:
        return {name: cmd["description"] for name, cmd in self.commands.items()}

    async def dispatch(self, name: str, args: List[str], ctx: CommandContext):
        handler = self.get_command(name)
        if handler:
            await handler(ctx, args)
        else:
            ctx.console.print(f"[yellow]Unknown command: {name}[/yellow]")


# Global registry
registry = CommandRegistry()


def render_providers(ctx: CommandContext) -> Table:
    table = Table(title="Wallet Providers")
    table.add_column("Name", style="cyan")
    table.add_column("Display Name", style="white")
    table.add_column("Status", style="dim")

    connecting = ctx.session.manager.currently_connecting()
    for provider in ctx.providers:
        if provider.name == connecting:
            status = "[yellow]connecting...[/yellow]"
        elif provider.name == ctx.session.connected_provider:
            status = "[green]connected[/green]"
        else:
            status = ""
        table.add_row(provider.name, provider.display_name, status)
    return table


def render_wallet_card(session: WalletSession) -> Panel:
    symbol = session.token_symbol
    lines = [
        f"Provider: [bold]{session.connected_provider}[/bold]",
        f"Address:  [cyan]{session.address.text}[/cyan]",
        f"Balance:  [bold]{format_balance(session.balance)}[/bold] {symbol}",
    ]
    fiat = estimate_fiat_value(session.balance)
    if fiat:
        lines.append(f"[dim]Estimated value: {fiat}[/dim]")
    return Panel("\n".join(lines), title="My Wallet", border_style="blue")


# --- Standard Commands ---

async def show_help(ctx: CommandContext, args: List[str] = None):
    """Show available commands."""
    table = Table(title="Available Commands")
    table.add_column("Command", style="cyan")
    table.add_column("Description", style="white")

    for name, description in sorted(registry.get_all_commands().items()):
        table.add_row(name, description)

    ctx.console.print(table)


async def show_providers(ctx: CommandContext, args: List[str] = None):
    ctx.console.print(render_providers(ctx))


async def connect_provider(ctx: CommandContext, args: List[str] = None):
    """Connect to a provider. Names may contain spaces (Trust Wallet)."""
    if not args:
        name = Prompt.ask("Provider", choices=ctx.providers.names() or None)
    else:
        name = " ".join(args)
    provider = ctx.providers.resolve(name)

    with ctx.console.status(f"[bold green]Connecting to {provider}..."):
        connected = await ctx.session.connect(provider)

    if connected:
        ctx.console.print(render_wallet_card(ctx.session))


def _require_connection(ctx: CommandContext) -> bool:
    if not ctx.session.is_connected:
        ctx.console.print("[yellow]No wallet connected. Use /connect <provider> first.[/yellow]")
        return False
    return True


async def show_balance(ctx: CommandContext, args: List[str] = None):
    if not _require_connection(ctx):
        return
    with ctx.console.status("[bold green]Fetching balance..."):
        await ctx.session.refresh()
    ctx.console.print(render_wallet_card(ctx.session))


async def toggle_reveal(ctx: CommandContext, args: List[str] = None):
    if not _require_connection(ctx):
        return
    masked = ctx.session.address.toggle()
    state = "hidden" if masked else "revealed"
    ctx.console.print(f"Address {state}: [cyan]{ctx.session.address.text}[/cyan]")


async def show_receive(ctx: CommandContext, args: List[str] = None):
    if not _require_connection(ctx):
        return
    symbol = ctx.session.token_symbol
    ctx.console.print(Panel(
        f"[bold]{ctx.session.receive_address()}[/bold]\n\n"
        f"Share this address to receive {symbol} tokens.",
        title=f"Receive {symbol}",
        border_style="green"
    ))


async def send_tokens(ctx: CommandContext, args: List[str] = None):
    """Send tokens: /send <recipient> <amount|max>. Prompts for missing values."""
    if not _require_connection(ctx):
        return
    args = args or []
    session = ctx.session
    symbol = session.token_symbol

    recipient = args[0] if len(args) > 0 else Prompt.ask("Recipient address")
    amount = args[1] if len(args) > 1 else Prompt.ask(
        f"Amount (available: {format_balance(session.balance)} {symbol}, 'max' for all)"
    )
    if amount.strip().lower() == "max":
        session.form.fill_max()
        amount = session.form.amount

    with ctx.console.status("[bold green]Sending..."):
        result = await session.send(recipient, amount)

    if not result.valid:
        ctx.console.print(f"[red]{result.message}[/red]")
        return
    if session.last_receipt:
        ctx.console.print(f"Transaction hash: [cyan]{session.last_receipt.tx_hash}[/cyan]")


registry.register("/help", "Show available commands", show_help)
registry.register("/providers", "List wallet providers", show_providers)
registry.register("/connect", "Connect to a wallet provider", connect_provider)
registry.register("/balance", "Show address and balance", show_balance)
registry.register("/reveal", "Show or hide the full address", toggle_reveal)
registry.register("/receive", "Show the address to receive tokens", show_receive)
registry.register("/send", "Send tokens: /send <recipient> <amount|max>", send_tokens)
