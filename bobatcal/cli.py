"""Flask CLI commands for local setup and out-of-band role changes."""
import click
from flask.cli import with_appcontext

from bobatcal import db
from bobatcal.models import User, Role


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create all tables (local development)."""
    db.create_all()
    click.echo('Database tables created.')


@click.command('set-role')
@with_appcontext
@click.argument('user_id', type=int)
@click.argument('role', type=click.Choice([r.value for r in Role]))
def set_role_command(user_id, role):
    """Promote or demote a user, e.g. `flask set-role 3 admin`."""
    user = db.session.get(User, user_id)
    if not user:
        raise click.ClickException(f'No user with id {user_id}')

    user.role = Role(role)
    db.session.commit()
    click.echo(f'{user.name or user.id} is now {user.role.value}.')


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(set_role_command)
