"""
todolist-service Command Line Interface.

Commands: serve, token, policies, demo
"""

from __future__ import annotations

import json
import logging

import click

from . import __version__
from .access import AccessDecisionEngine
from .config import Settings
from .errors import TodoListError
from .identity import CallerIdentity, issue_token
from .policy import PolicyRegistry
from .todos import Todo, TodoStore


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Logging level (default: TODOLIST_LOG_LEVEL or INFO)")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """todolist-service: claims-protected multi-tenant to-do list API"""
    settings = Settings.from_env()
    if log_level:
        settings.log_level = log_level.upper()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    ctx.obj = settings


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind host")
@click.option("--port", default=5000, help="Bind port")
@click.option("--strict-ownership/--observed-ownership", default=None,
              help="Unify owner checks for update and delete")
@click.pass_obj
def serve(settings: Settings, host: str, port: int, strict_ownership: bool | None):
    """Run the HTTP API."""
    from .api import create_app

    if strict_ownership is not None:
        settings.strict_ownership = strict_ownership
    click.echo(f"[*] Starting todolist-service on {host}:{port}")
    app = create_app(settings=settings)
    app.run(host=host, port=port)


@cli.command()
@click.option("--name", default="", help="Display name claim")
@click.option("--oid", default=None, help="Object id claim")
@click.option("--scope", "scopes", multiple=True, help="Scope to grant (repeatable)")
@click.option("--role", "roles", multiple=True, help="Role to grant (repeatable)")
@click.option("--secret", default=None, help="Signing secret (default: TODOLIST_JWT_SECRET)")
@click.pass_obj
def token(settings: Settings, name: str, oid: str | None, scopes: tuple[str, ...],
          roles: tuple[str, ...], secret: str | None):
    """Mint a signed development bearer token."""
    click.echo(issue_token(
        secret or settings.jwt_secret,
        name=name,
        oid=oid,
        scopes=list(scopes),
        roles=list(roles),
        algorithm=settings.jwt_algorithms[0],
    ))


@cli.command()
@click.option("--file", "policy_file", default=None, help="YAML policy file")
@click.pass_obj
def policies(settings: Settings, policy_file: str | None):
    """Show authorization policies and export them as YAML."""
    registry = PolicyRegistry()
    path = policy_file or settings.policy_file
    if path:
        loaded = registry.load_file(path)
        click.echo(f"[+] Loaded {len(loaded)} policies from {path}")

    summary = registry.policy_summary()
    click.echo(f"\n--- Policy Summary ---")
    click.echo(f"Total: {summary['total_policies']}")
    for p in summary["policies"]:
        click.echo(f"  {p['name']:12s} scopes={','.join(p['scopes']) or '-'} "
                   f"roles={','.join(p['roles']) or '-'}")

    click.echo("\n--- Exported YAML ---")
    click.echo(registry.export_yaml())


@cli.command()
@click.option("--strict-ownership", is_flag=True, help="Run with unified owner checks")
def demo(strict_ownership: bool):
    """Run an end-to-end access decision scenario."""
    click.echo("=" * 60)
    click.echo("  todolist-service  -  Access Decision Demo")
    click.echo("=" * 60)

    store = TodoStore([Todo(id=1, owner="alice", title="A")])
    engine = AccessDecisionEngine(store=store, strict_ownership=strict_ownership)

    alice = CallerIdentity(name="Alice", object_id="alice", scopes=frozenset({"ToDo.Read", "ToDo.Write"}))
    bob = CallerIdentity(name="Bob", object_id="bob", scopes=frozenset({"ToDo.Read", "ToDo.Write"}))
    daemon = CallerIdentity(name="sync-daemon", roles=frozenset({"Todo.Read.All"}))
    nobody = CallerIdentity(name="guest")

    def attempt(label: str, fn, *args):
        try:
            result = fn(*args)
        except TodoListError as exc:
            click.echo(f"    {label:36s} -> {exc.code}: {exc.message}")
            return None
        if isinstance(result, list):
            shown = json.dumps([t.to_dict() for t in result])
        elif isinstance(result, Todo):
            shown = json.dumps(result.to_dict())
        else:
            shown = json.dumps(result)
        click.echo(f"    {label:36s} -> ok {shown}")
        return result

    click.echo("\n[1/4] Reading...")
    attempt("alice reads #1", engine.get_todo, alice, 1)
    attempt("bob reads #1", engine.get_todo, bob, 1)
    attempt("guest lists", engine.list_todos, nobody)

    click.echo("\n[2/4] Creating...")
    attempt("bob creates 'B'", engine.create_todo, bob, "B")
    attempt("daemon lists all", engine.list_todos, daemon)

    click.echo("\n[3/4] Updating...")
    attempt("alice patches #1 with body id 2", engine.update_todo, alice, 1, Todo(id=2, owner="alice", title="x"))
    attempt("bob patches #1", engine.update_todo, bob, 1, Todo(id=1, owner="bob", title="A*"))

    click.echo("\n[4/4] Deleting...")
    attempt("alice deletes #2", engine.delete_todo, alice, 2)
    attempt("bob deletes #2", engine.delete_todo, bob, 2)
    attempt("bob deletes #99", engine.delete_todo, bob, 99)

    click.echo(f"\nDecision stats: {json.dumps(engine.decision_stats())}")
    click.echo("\n" + "=" * 60)
    click.echo("  Demo complete.")
    click.echo("=" * 60)


def main():
    cli()


if __name__ == "__main__":
    main()
