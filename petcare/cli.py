# petcare/cli.py
import logging
import click
from flask import Flask, current_app

from petcare.models.user import UserRole


def register_commands(app: Flask) -> None:
    """Attach the management commands to `flask`."""

    @app.cli.command('seed-admin')
    @click.option('--email', default=None, help='Admin email (default: ADMIN_EMAIL)')
    @click.option('--username', default=None, help='Admin username (default: ADMIN_USERNAME)')
    @click.option('--password', default=None, help='Admin password (default: ADMIN_PASSWORD)')
    @click.option('--full-name', default='Administrator', show_default=True)
    def seed_admin(email, username, password, full_name):
        """Create the initial admin account if it does not exist yet."""
        email = (email or current_app.config['ADMIN_EMAIL']).strip().lower()
        username = username or current_app.config['ADMIN_USERNAME']
        password = password or current_app.config['ADMIN_PASSWORD']
        if not password:
            raise click.UsageError("Provide --password or set ADMIN_PASSWORD.")

        auth_service = current_app.services['auth']
        if auth_service.find_by_email(email):
            click.echo(f"Admin user already exists: {email}")
            return

        user, _ = auth_service.register(
            username=username, email=email, password=password,
            full_name=full_name, role=UserRole.ADMIN
        )
        logging.info(f"Admin account seeded (user_id: {user.user_id})")
        click.echo(f"Admin user created: {email}")
