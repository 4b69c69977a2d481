import asyncio
import logging
import typer
from rich.console import Console
from rich.panel import Panel
from typing import Optional, Awaitable, Callable
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style

from wallet_panel.provider_registry import ProviderRegistry
from wallet_panel.session import WalletSession
from wallet_panel.wallets import get_wallet_backend
from .config import ConfigManager
from .notifications import ConsoleNotificationSink
from . import commands as cmd_lib

app = typer.Typer(help="Wallet Panel - connect a wallet provider, check your balance and send tokens")
console = Console()
config_manager = ConfigManager()

EXIT_WORDS = ("/exit", "exit", "quit")


def _build_context() -> cmd_lib.CommandContext:
    backend = get_wallet_backend(
        service_url=config_manager.get_service_url(),
        use_mock=config_manager.uses_mock(),
    )
    session = WalletSession(
        connector=backend,
        wallet=backend,
        notifier=ConsoleNotificationSink(console),
        token_symbol=config_manager.get_token_symbol(),
        mask_addresses=config_manager.masks_addresses(),
    )
    providers = ProviderRegistry.from_config(config_manager.get_providers_file())
    return cmd_lib.CommandContext(session, console, config_manager, providers)


def _run_connected(provider: Optional[str], action: Callable[[cmd_lib.CommandContext], Awaitable[None]]):
    """Connect to `provider` (or the last connected one), then run `action`."""
    ctx = _build_context()
    name = provider or config_manager.get("default_provider") or next(iter(ctx.providers.names()), None)
    if not name:
        console.print("[yellow]No wallet provider configured. Add one to wallet_providers.yaml.[/yellow]")
        return
    name = ctx.providers.resolve(name)

    async def runner():
        try:
            with console.status(f"[bold green]Connecting to {name}..."):
                connected = await ctx.session.connect(name)
            if connected:
                await action(ctx)
        finally:
            await ctx.session.wallet.close()

    asyncio.run(runner())


@app.callback()
def main():
    logging.basicConfig(level=config_manager.get_log_level())


@app.command()
def configure(
    service_url: str = typer.Option("http://localhost:8080", prompt="Enter wallet bridge URL"),
    token_symbol: str = typer.Option("NETX", prompt="Enter token symbol"),
    use_mock: bool = typer.Option(True, help="Use the built-in mock wallet instead of the bridge"),
    mask_addresses: bool = typer.Option(True, help="Mask addresses by default"),
):
    """
    Configure the wallet panel.
    """
    config_manager.set_service_url(service_url)
    config_manager.set("token_symbol", token_symbol)
    config_manager.set("use_mock", use_mock)
    config_manager.set("mask_addresses", mask_addresses)
    console.print("[green]Configuration saved.[/green]")
    console.print(f"Wallet bridge: [blue]{service_url}[/blue]{' (mock mode)' if use_mock else ''}")


@app.command()
def config():
    """
    Show current configuration.
    """
    console.print(Panel(
        f"Wallet bridge: [blue]{config_manager.get_service_url()}[/blue]\n"
        f"Mock mode: [bold]{config_manager.uses_mock()}[/bold]\n"
        f"Token: [bold]{config_manager.get_token_symbol()}[/bold]\n"
        f"Mask addresses: [bold]{config_manager.masks_addresses()}[/bold]\n"
        f"Default provider: [bold]{config_manager.get('default_provider')}[/bold]",
        title="Current Configuration"
    ))


@app.command()
def providers():
    """
    List the wallet providers you can connect to.
    """
    ctx = _build_context()
    console.print(cmd_lib.render_providers(ctx))


@app.command()
def connect(provider: str = typer.Argument(..., help="Provider name, e.g. Phantom or \"Trust Wallet\"")):
    """
    Connect to a wallet provider and remember it as the default.
    """
    try:
        ctx = _build_context()
        name = ctx.providers.resolve(provider)

        async def runner() -> bool:
            try:
                with console.status(f"[bold green]Connecting to {name}..."):
                    return await ctx.session.connect(name)
            finally:
                await ctx.session.wallet.close()

        if asyncio.run(runner()):
            config_manager.set("default_provider", name)
            console.print(cmd_lib.render_wallet_card(ctx.session))
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")


@app.command()
def balance(
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="Provider to connect with"),
    reveal: bool = typer.Option(False, "--reveal", help="Show the full address"),
):
    """
    Show the wallet address and balance.
    """
    async def action(ctx: cmd_lib.CommandContext):
        if reveal:
            ctx.session.address.masked = False
        console.print(cmd_lib.render_wallet_card(ctx.session))

    try:
        _run_connected(provider, action)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")


@app.command()
def receive(provider: Optional[str] = typer.Option(None, "--provider", "-p", help="Provider to connect with")):
    """
    Show the full address to receive tokens.
    """
    try:
        _run_connected(provider, lambda ctx: cmd_lib.show_receive(ctx, []))
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")


@app.command()
def send(
    recipient: str = typer.Argument(..., help="Recipient address"),
    amount: str = typer.Argument(..., help="Amount to send, or 'max' for the whole balance"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="Provider to connect with"),
):
    """
    Send tokens to another wallet address.
    """
    try:
        _run_connected(provider, lambda ctx: cmd_lib.send_tokens(ctx, [recipient, amount]))
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")


async def _panel_loop(ctx: cmd_lib.CommandContext):
    commands = cmd_lib.registry.get_all_commands()
    command_completer = WordCompleter(list(commands.keys()) + ctx.providers.names(), ignore_case=True)
    prompt_session = PromptSession(completer=command_completer)

    style = Style.from_dict({
        'prompt': 'cyan bold',
    })

    while True:
        try:
            label = ctx.session.connected_provider or "wallet"
            user_input = await prompt_session.prompt_async(f"{label}> ", style=style)

            if not user_input.strip():
                continue
            if user_input.strip().lower() in EXIT_WORDS:
                break

            parts = user_input.split()
            cmd = parts[0].lower()
            if not cmd.startswith("/"):
                cmd = f"/{cmd}"
            args = parts[1:]

            if cmd_lib.registry.get_command(cmd):
                await cmd_lib.registry.dispatch(cmd, args, ctx)
            else:
                console.print(f"[yellow]Unknown command: {cmd}. Type /help for available commands.[/yellow]")
            console.print()

        except (KeyboardInterrupt, EOFError):
            break
        except Exception as e:
            console.print(f"[red]Error:[/red] {e}")

    await ctx.session.wallet.close()
    console.print("[yellow]Goodbye![/yellow]")


@app.command()
def panel():
    """
    Start the interactive wallet panel.
    Supports slash commands like /connect, /balance, /send.
    """
    try:
        ctx = _build_context()
        console.print(Panel(
            "Welcome to the Wallet Panel!\n"
            f"Providers: [bold cyan]{', '.join(ctx.providers.names())}[/bold cyan]\n"
            "Type '/help' for commands, or '/exit' to quit.",
            title="Wallet Panel",
            border_style="green"
        ))
        asyncio.run(_panel_loop(ctx))
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")


if __name__ == "__main__":
    app()
