"""Vela CLI application using Typer.

Command-line utilities for running and operating the backend: secret
generation, serving the API and bootstrapping the first admin account.
"""

import asyncio
import secrets
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from vela.domain.shared.exceptions import DomainException
from vela.infrastructure.persistence.sqlalchemy import (
    build_engine,
    build_session_maker,
    create_tables,
)
from vela_config.settings import Settings, get_settings
from vela_identity.application.commands import CreateUserCommand
from vela_identity.domain.user import Gender, User, UserRole
from vela_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)
from vela_identity.services import PasswordHashingService

app = typer.Typer(
    name="vela",
    help="Vela backend CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

users_app = typer.Typer(
    name="users",
    help="User administration",
    no_args_is_help=True,
)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Vela configuration.

    Access and refresh tokens are signed with independent secrets.
    Copy the output to your .env file.
    """
    console.print("\n[bold green]Vela Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy per JWT secret for HS256; never wrap, values get copied
    generated = {
        "JWT_ACCESS_SECRET": secrets.token_urlsafe(64),
        "JWT_REFRESH_SECRET": secrets.token_urlsafe(64),
        "POSTGRES_PASSWORD": secrets.token_urlsafe(32),
    }
    for name, value in generated.items():
        console.print(f"[cyan]{name}[/cyan]={value}", soft_wrap=True)

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "vela.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


async def _create_admin(
    settings: Settings,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    gender: Gender,
) -> User:
    engine = build_engine(settings.sqlalchemy_database_url)
    try:
        await create_tables(engine)
        async with build_session_maker(engine)() as session:
            command = CreateUserCommand(
                UserRepositorySQLAlchemy(session),
                PasswordHashingService(rounds=settings.password_hash_rounds),
            )
            user = await command.execute(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                gender=gender,
                role=UserRole.ADMIN,
            )
            await session.commit()
            return user
    finally:
        await engine.dispose()


@users_app.command("create-admin")
def create_admin(
    email: str = typer.Argument(..., help="Email address of the admin"),
    first_name: str = typer.Option("Admin", help="First name"),
    last_name: str = typer.Option("User", help="Last name"),
    gender: Gender = typer.Option(Gender.OTHER, help="Gender"),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password (prompted when omitted)",
    ),
) -> None:
    """Create an admin account (tables are created if missing)."""
    try:
        user = asyncio.run(
            _create_admin(
                get_settings(),
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                gender=gender,
            ),
        )
    except DomainException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Admin created:[/green] {user.email} ({user.id})")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
