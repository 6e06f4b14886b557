"""
pbac/cli/check.py

pbac check / pbac validate — policy decisions from the terminal
================================================================

Usage:
    pbac check <action> [<resource>...] --policies policies.yaml
    pbac check <action> [<resource>...] --format json
    pbac check <action> [<resource>...] --quiet
    pbac validate policies.yaml

The policy file may also be given through PBAC_POLICY_FILE.

Exit codes (shell-scriptable):
    check      0  Allow
               1  Deny (explicit or implicit)
               2  Error  (file missing, malformed policy, malformed request)
    validate   0  Policy file valid
               2  Policy file invalid
"""

import json
import logging
import sys
from typing import List, Tuple

import click

from pbac.core.exceptions import PbacError
from pbac.policy.engine import PolicyEngine
from pbac.policy.policy import Effect, Policy


# ── ANSI color ────────────────────────────────────────────────────────────────

class _Color:
    """
    Minimal ANSI color wrapper.
    Auto-disables when not a TTY or --no-color is passed.
    """
    _on: bool = True

    @classmethod
    def configure(cls, enabled: bool) -> None:
        cls._on = enabled and sys.stdout.isatty()

    @classmethod
    def green(cls, s: str) -> str:
        return f"\033[32m{s}\033[0m" if cls._on else s

    @classmethod
    def red(cls, s: str) -> str:
        return f"\033[31m{s}\033[0m" if cls._on else s

    @classmethod
    def bold(cls, s: str) -> str:
        return f"\033[1m{s}\033[0m" if cls._on else s

    @classmethod
    def dim(cls, s: str) -> str:
        return f"\033[2m{s}\033[0m" if cls._on else s


def _row_info(label: str, value: str) -> str:
    label_col = _Color.dim(f"{label:<12}")
    return f"  {label_col}  {value}"


def _policy_label(policy: Policy) -> str:
    return policy.policy_id or policy.policy_hash[:12]


def _policy_json(policy: Policy) -> dict:
    return {
        "id": policy.policy_id,
        "policy_hash": policy.policy_hash,
        **policy.to_dict(),
    }


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[pbac] %(asctime)s - %(levelname)s - %(name)s - %(message)s",
        )


def _emit_error(msg: str, fmt: str, quiet: bool, root: str) -> None:
    """Emit error in the correct format. Never raises."""
    if quiet:
        return
    if fmt == "json":
        click.echo(json.dumps({root: {"error": msg}}))
    else:
        click.echo(_Color.red(f"\n  ERROR: {msg}\n"), err=True)


def _load_engine(policy_file: str, fmt: str, quiet: bool, root: str) -> PolicyEngine:
    try:
        return PolicyEngine.from_yaml(policy_file)
    except PbacError as e:
        _emit_error(str(e), fmt, quiet, root)
        sys.exit(2)


# ── pbac check ────────────────────────────────────────────────────────────────

@click.command(name="check")
@click.argument("action")
@click.argument("resources", nargs=-1)
@click.option(
    "--policies", "policy_file",
    type=click.Path(),
    envvar="PBAC_POLICY_FILE",
    required=True,
    metavar="PATH",
    help="YAML policy file (or set PBAC_POLICY_FILE).",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format: human (default) or json.",
)
@click.option(
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress all output. Use exit code only (0=allow, 1=deny, 2=error).",
)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log evaluation details to stderr.",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable ANSI color output.",
)
def check_command(
    action:      str,
    resources:   Tuple[str, ...],
    policy_file: str,
    fmt:         str,
    quiet:       bool,
    verbose:     bool,
    no_color:    bool,
) -> None:
    """
    Decide whether ACTION on RESOURCES is allowed.

    ACTION is scope:verb:resource, each RESOURCE is scope:resource.

    \b
    Examples:
      pbac check account:Get:account-123 account:account-123 --policies p.yaml
      pbac check account:Delete:x account:x --format json
    """
    _Color.configure(not no_color)
    _configure_logging(verbose)
    fmt = fmt.lower()

    engine = _load_engine(policy_file, fmt, quiet, "pbac_check")

    try:
        effect, matched = engine.authorize(action, resources)
    except PbacError as e:
        _emit_error(str(e), fmt, quiet, "pbac_check")
        sys.exit(2)

    exit_code = 0 if effect is Effect.ALLOW else 1

    if quiet:
        sys.exit(exit_code)

    if fmt == "json":
        click.echo(json.dumps({
            "pbac_check": {
                "action":           action,
                "resources":        list(resources),
                "effect":           effect.value,
                "implicit":         not matched,
                "matched_policies": [_policy_json(p) for p in matched],
            }
        }, indent=2))
    else:
        _output_human(action, list(resources), effect, matched)

    sys.exit(exit_code)


def _output_human(
    action:    str,
    resources: List[str],
    effect:    Effect,
    matched:   List[Policy],
) -> None:
    click.echo()
    click.echo(_row_info("Action", action))
    click.echo(_row_info("Resources", ", ".join(resources) or "(none)"))

    if effect is Effect.ALLOW:
        verdict = _Color.green(effect.value)
    else:
        verdict = _Color.red(effect.value)
    if not matched:
        verdict += _Color.dim("  (implicit, no matching policy)")
    click.echo(_row_info("Decision", _Color.bold(verdict)))

    for policy in matched:
        click.echo(_row_info("Policy", _policy_label(policy)))
    click.echo()


# ── pbac validate ─────────────────────────────────────────────────────────────

@click.command(name="validate")
@click.argument("policy_file", type=click.Path())
@click.option(
    "--format", "fmt",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format: human (default) or json.",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable ANSI color output.",
)
def validate_command(policy_file: str, fmt: str, no_color: bool) -> None:
    """
    Parse every statement in POLICY_FILE and report the policy set.
    """
    _Color.configure(not no_color)
    fmt = fmt.lower()

    engine = _load_engine(policy_file, fmt, False, "pbac_validate")
    stats = engine.get_policy_stats()

    if fmt == "json":
        click.echo(json.dumps({
            "pbac_validate": {
                "policy_file":     policy_file,
                "valid":           True,
                "policy_count":    stats["policy_count"],
                "policy_set_hash": stats["policy_set_hash"],
                "policies":        [_policy_json(p) for p in engine.policies],
            }
        }, indent=2))
        return

    click.echo()
    click.echo(_row_info("File", policy_file))
    click.echo(_row_info("Policies", str(stats["policy_count"])))
    click.echo(_row_info("Set hash", stats["policy_set_hash"]))
    for policy in engine.policies:
        click.echo(_row_info(
            policy.effect.value,
            f"{_policy_label(policy)}  actions={len(policy.actions)} "
            f"resources={len(policy.resources)}",
        ))
    click.echo()
    click.echo(_Color.green("  Policy file is valid"))
