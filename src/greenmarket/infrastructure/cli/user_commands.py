"""CLI commands for the user directory and producer profiles."""

from __future__ import annotations

import click

from greenmarket.application.authenticate_user import AuthenticateUserHandler
from greenmarket.application.producer_profile import (
    GetProducerProfileHandler,
    UpdateProducerProfileHandler,
)
from greenmarket.application.register_user import RegisterUserHandler
from greenmarket.domain.exceptions import DomainException
from greenmarket.infrastructure.bootstrap import container


@click.command("register")
@click.option("--name", "full_name", required=True, help="Full name.")
@click.option("--email", required=True, help="Email address (unique).")
@click.option("--password", prompt=True, hide_input=True, help="Password.")
@click.option(
    "--role",
    type=click.Choice(["Consumer", "Producer"], case_sensitive=False),
    required=True,
    help="Account type.",
)
def user_register(full_name: str, email: str, password: str, role: str) -> None:
    """Register a consumer or producer account."""
    c = container()
    handler = RegisterUserHandler(user_repo=c.user_repo, hasher=c.hasher)

    try:
        user_id = handler.handle(full_name, email, password, role)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user_id} registered as {role.capitalize()}.")


@click.command("login")
@click.option("--email", required=True, help="Email address.")
@click.option("--password", prompt=True, hide_input=True, help="Password.")
def user_login(email: str, password: str) -> None:
    """Check credentials and print the identity to use in other commands."""
    c = container()
    handler = AuthenticateUserHandler(user_repo=c.user_repo, hasher=c.hasher)

    try:
        dto = handler.handle(email, password)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Welcome, {dto.full_name}.")
    click.echo(f"User ID: {dto.user_id}")
    click.echo(f"Role:    {dto.role}")


@click.command("profile")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
def user_profile(producer_id: str) -> None:
    """Show a producer's public profile."""
    handler = GetProducerProfileHandler(user_repo=container().user_repo)

    try:
        dto = handler.handle(producer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Producer:    {dto.full_name}")
    click.echo(f"Email:       {dto.email}")
    click.echo(f"Description: {dto.description or '-'}")
    click.echo(f"Image:       {dto.profile_image_url or '-'}")


@click.command("update-profile")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
@click.option("--name", "full_name", required=True, help="Full name.")
@click.option("--description", default=None, help="Profile description.")
@click.option("--image-url", "profile_image_url", default=None, help="Profile image URL.")
@click.option("--new-password", default=None, help="Replace the password.")
def user_update_profile(
    producer_id: str,
    full_name: str,
    description: str | None,
    profile_image_url: str | None,
    new_password: str | None,
) -> None:
    """Update a producer's profile."""
    c = container()
    handler = UpdateProducerProfileHandler(user_repo=c.user_repo, hasher=c.hasher)

    try:
        handler.handle(
            producer_id,
            full_name,
            description=description,
            profile_image_url=profile_image_url,
            new_password=new_password,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Profile updated.")
