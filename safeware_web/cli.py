# Overview: Flask CLI command groups for backend connectivity and role inspection.

# safeware_web/cli.py
# Commands Legend:
# Prereqs:
# - Set FLASK_APP to safeware_web (PowerShell: $env:FLASK_APP="safeware_web").
# - Use: flask <group> <command> [options]
#
# Backend connectivity:
# - flask backend ping
#   Call the backend health URL and report status and latency.
# - flask backend config
#   Show the API settings this frontend will use (never the secret key).
#
# Role inspection:
# - flask roles list [--role Manager] [--category INVENTORY]
#   List capability codes, optionally for one role or category.
# - flask roles check Auditor EDIT_ITEMS
#   Check whether a role's capability set grants a capability.

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import api_gateway
from .models import ALL_ROLES
from .permissions import (
    ROLE_HOME_ENDPOINTS,
    get_all_capability_codes,
    get_capabilities_by_category,
    get_capability_definition,
    validate_capability_code,
)
from .services.permission_service import CapabilityDeniedError, require_capability, resolve_capabilities


@click.group('backend')
def backend_group():
    """Inventory API connectivity commands."""


@backend_group.command('ping')
@with_appcontext
def ping_backend_cli():
    """Check that the inventory API answers its health endpoint."""
    result = api_gateway.check_backend()
    url = current_app.config["BACKEND_HEALTH_URL"]

    if result["status"] == "healthy":
        click.echo(f"PASS {url} answered {result['http_status']} in {result['latency_ms']} ms")
    elif result["status"] == "unhealthy":
        click.echo(f"FAIL {url} answered {result['http_status']} in {result['latency_ms']} ms")
    else:
        click.echo(f"FAIL {url} unreachable ({result['latency_ms']} ms)")


@backend_group.command('config')
@with_appcontext
def show_config_cli():
    """Show the API settings in effect."""
    config = current_app.config
    click.echo(f"API_BASE_URL:           {config['API_BASE_URL']}")
    click.echo(f"BACKEND_HEALTH_URL:     {config['BACKEND_HEALTH_URL']}")
    click.echo(f"API_TIMEOUT:            {config['API_TIMEOUT']}")
    click.echo(f"REFRESH_AFTER_MUTATION: {config['REFRESH_AFTER_MUTATION']}")


@click.group('roles')
def roles_group():
    """Role and capability inspection commands."""


@roles_group.command('list')
@click.option('--role', help='Only show capabilities granted to this role')
@click.option('--category', help='Filter by category')
def list_capabilities_cli(role, category):
    """List capabilities, optionally filtered by role or category."""
    if role and role not in ALL_ROLES:
        click.echo(f"FAIL Role '{role}' not found (expected one of: {', '.join(ALL_ROLES)})")
        return

    if category:
        codes = [code for code, _name, _desc, _cat in get_capabilities_by_category(category.upper())]
    else:
        codes = get_all_capability_codes()

    if role:
        granted = resolve_capabilities(role)
        codes = [code for code in codes if granted.has(code)]
        click.echo(f"\n{'='*80}")
        click.echo(f"Capabilities for role: {role.upper()} (home: {ROLE_HOME_ENDPOINTS[role]})")
        click.echo(f"{'='*80}\n")

    click.echo(f"{'Code':<22} {'Name':<30} {'Category'}")
    click.echo("-"*80)
    for code in codes:
        definition = get_capability_definition(code)
        click.echo(f"{code:<22} {definition['name']:<30} {definition['category']}")

    click.echo(f"\nTotal: {len(codes)} capabilities")


@roles_group.command('check')
@click.argument('role_name')
@click.argument('capability_code')
def check_capability_cli(role_name, capability_code):
    """Check whether a role is granted a capability."""
    if role_name not in ALL_ROLES:
        click.echo(f"FAIL Role '{role_name}' not found")
        return
    if not validate_capability_code(capability_code):
        click.echo(f"FAIL Capability '{capability_code}' not found")
        return

    capabilities = resolve_capabilities(role_name)
    try:
        require_capability(capabilities, capability_code)
    except CapabilityDeniedError:
        click.echo(f"FAIL Role '{role_name}' DOES NOT HAVE capability '{capability_code}'")
    else:
        click.echo(f"PASS Role '{role_name}' HAS capability '{capability_code}'")

    click.echo(f"\nRole capabilities: {', '.join(sorted(capabilities.codes))}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(backend_group)
    app.cli.add_command(roles_group)
