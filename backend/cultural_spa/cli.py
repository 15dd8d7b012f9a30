"""
Operator commands: seed data, create an admin, run the server.

    cultural-spa seed [--force]
    cultural-spa create-admin --username alice --password s3cret!
    cultural-spa serve [--reload]
"""

import asyncio
from pathlib import Path

import click
from fastapi import HTTPException
from pydantic import ValidationError

from cultural_spa.core.config import get_settings
from cultural_spa.core.logging import setup_logging
from cultural_spa.db.session import Database
from cultural_spa.models.user import ROLE_ADMIN
from cultural_spa.schemas.user import UserCreate
from cultural_spa.services.auth_service import create_user
from cultural_spa.services.seed_service import DatasetError, seed_dataset_if_needed, seed_users_if_needed


async def _seed(dataset_dir: Path, force: bool) -> tuple[bool, bool]:
    database = Database.from_settings(get_settings())
    try:
        async with database.sessionmaker() as session:
            users = await seed_users_if_needed(session)
            dataset = await seed_dataset_if_needed(session, dataset_dir, force=force)
    finally:
        await database.dispose()
    return users, dataset


async def _create_admin(username: str, password: str):
    database = Database.from_settings(get_settings())
    try:
        async with database.sessionmaker() as session:
            return await create_user(session, username, password, role=ROLE_ADMIN)
    finally:
        await database.dispose()


@click.group()
def cli():
    setup_logging()


@cli.command("seed")
@click.option("--force", is_flag=True, help="Replace venues and events even if present.")
@click.option("--dataset-dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=None)
def seed(force, dataset_dir):
    """Seed default users and the venue/event dataset."""
    dataset_dir = dataset_dir or get_settings().DATASET_DIR
    try:
        users, dataset = asyncio.run(_seed(dataset_dir, force))
    except DatasetError as e:
        raise click.ClickException(f"Dataset rejected: {e}")
    click.echo(f"users: {'seeded' if users else 'skipped'}; dataset: {'seeded' if dataset else 'skipped'}")


@cli.command("create-admin")
@click.option("--username", required=True)
@click.option("--password", required=True, prompt=True, hide_input=True, confirmation_prompt=True)
def create_admin(username, password):
    try:
        data = UserCreate(username=username, password=password, role=ROLE_ADMIN)
    except ValidationError as e:
        error = e.errors()[0]
        raise click.BadParameter(error["msg"], param_hint=f"--{error['loc'][0]}")
    try:
        user = asyncio.run(_create_admin(data.username, data.password))
    except HTTPException as e:
        raise click.ClickException(str(e.detail))
    click.echo(f"Admin created: {user.id} {user.username}")


@cli.command("serve")
@click.option("--host", default="0.0.0.0")
@click.option("--port", type=int, default=None)
@click.option("--reload", is_flag=True)
def serve(host, port, reload):
    import uvicorn

    uvicorn.run("cultural_spa.main:app", host=host, port=port or get_settings().PORT, reload=reload)


if __name__ == "__main__":
    cli()
