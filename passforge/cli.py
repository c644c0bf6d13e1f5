"""CLI for PassForge: generate, score, account (register/login/logout/whoami), history."""

import argparse
import sys
from getpass import getpass

from rich import print
from rich.panel import Panel
from rich.table import Table

from .accounts import AccountStore, clear_session, load_session, save_session
from .config import accounts_path, default_generation_config, load_config
from .errors import AccountError, PassForgeError
from .evaluator import score_password
from .generator import GenerationConfig, generate_rated
from .logging_config import setup_logging

LABEL_STYLES = {
    "Very Strong": "bold green",
    "Strong": "green",
    "Medium": "yellow",
    "Weak": "red",
}


def _store(args) -> AccountStore:
    return AccountStore(args.accounts or accounts_path(args.settings))


def _require_session(args):
    session = load_session(args.session_file)
    if session is None:
        raise AccountError("Not logged in. Run 'passforge account login' first.")
    return session


def _config_from_args(args) -> GenerationConfig:
    base = default_generation_config(args.settings)
    return GenerationConfig(
        length=args.length if args.length is not None else base.length,
        include_uppercase=base.include_uppercase and not args.no_upper,
        include_lowercase=base.include_lowercase and not args.no_lower,
        include_numbers=base.include_numbers and not args.no_digits,
        include_special=base.include_special and not args.no_symbols,
        exclude_similar=base.exclude_similar or args.exclude_similar,
        memorable_mode=base.memorable_mode or args.memorable,
    )


def _styled(label: str) -> str:
    style = LABEL_STYLES.get(label, "white")
    return f"[{style}]{label}[/{style}]"


def cmd_generate(args):
    config = _config_from_args(args)
    store = session = None
    if args.save:
        session = _require_session(args)
        store = _store(args)

    for i in range(args.copies):
        is_unique = store.uniqueness_predicate(session) if store else None
        pw, rating = generate_rated(config, is_unique)
        if store:
            store.add_to_history(session, pw, rating.label)
        print(
            f"[bold green]Password #{i+1}:[/bold green] {pw}  "
            f"{_styled(rating.label)} ({rating.display_score}/100)"
        )
    return 0


def cmd_score(args):
    rating = score_password(args.password)
    header = f"Score: {rating.display_score} / 100 — {_styled(rating.label)}"
    body = (
        f"Raw score: {rating.score}\n"
        f"Estimated entropy: {rating.entropy_bits:.1f} bits"
    )
    print(Panel(body, title=header))
    return 0


# Account subcommands

def cmd_account_register(args):
    username = args.username or input("Username: ")
    email = args.email or input("Email: ")
    password = args.password or getpass("Password: ")
    if not args.password:
        confirm = getpass("Confirm password: ")
        if password != confirm:
            print("[red]Passwords do not match. Aborting.[/red]")
            return 1
    _store(args).register(username, email, password)
    print("[green]Registration successful! Please login.[/green]")
    return 0


def cmd_account_login(args):
    identifier = args.identifier or input("Username or email: ")
    password = args.password or getpass("Password: ")
    session = _store(args).login(identifier, password)
    save_session(session, args.session_file)
    print(f"[green]Logged in as[/green] {session.username}")
    return 0


def cmd_account_logout(args):
    if clear_session(args.session_file):
        print("[green]Logged out successfully.[/green]")
    else:
        print("[yellow]No active session.[/yellow]")
    return 0


def cmd_account_whoami(args):
    session = _require_session(args)
    user = _store(args).get_user(session.user_id)
    print(f"{user.username} <{user.email}>, member since {user.created_at}")
    return 0


def cmd_history(args):
    session = _require_session(args)
    store = _store(args)
    if args.clear:
        store.clear_history(session)
        print("[green]History cleared.[/green]")
        return 0

    entries = store.history(session)
    if not entries:
        print("[yellow]No passwords generated yet.[/yellow]")
        return 0
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", width=4)
    table.add_column("Password")
    table.add_column("Strength")
    table.add_column("Generated")
    for i, e in enumerate(entries):
        table.add_row(str(i), e.password, _styled(e.strength), e.timestamp)
    print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="passforge")
    parser.add_argument("--accounts", type=str, help="Path to the accounts file")
    parser.add_argument("--session-file", type=str, help="Path to the session file")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="More log output (-v info, -vv debug)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    gen.add_argument("--length", type=int, default=None, help="Password length")
    gen.add_argument("--no-symbols", action="store_true", help="Disable special characters")
    gen.add_argument("--no-upper", action="store_true", help="Disable uppercase")
    gen.add_argument("--no-lower", action="store_true", help="Disable lowercase")
    gen.add_argument("--no-digits", action="store_true", help="Disable digits")
    gen.add_argument("--exclude-similar", action="store_true", help="Leave out look-alike characters (O0lI1)")
    gen.add_argument("--memorable", action="store_true", help="Build the password from words")
    gen.add_argument("--copies", type=int, default=1, help="How many passwords to generate")
    gen.add_argument("--save", action="store_true", help="Avoid and record into the logged-in user's history")
    gen.set_defaults(func=cmd_generate)

    sc = sub.add_parser("score", help="Score a password")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.set_defaults(func=cmd_score)

    acc = sub.add_parser("account", help="Account operations")
    asub = acc.add_subparsers(dest="acmd", required=True)

    a_reg = asub.add_parser("register", help="Create an account")
    a_reg.add_argument("--username", type=str)
    a_reg.add_argument("--email", type=str)
    a_reg.add_argument("--password", type=str, help="Account password (avoid passing via CLI in public shells)")
    a_reg.set_defaults(func=cmd_account_register)

    a_login = asub.add_parser("login", help="Log in and remember the session")
    a_login.add_argument("identifier", nargs="?", help="Username or email")
    a_login.add_argument("--password", type=str, help="Account password (avoid passing via CLI in public shells)")
    a_login.set_defaults(func=cmd_account_login)

    a_logout = asub.add_parser("logout", help="Forget the current session")
    a_logout.set_defaults(func=cmd_account_logout)

    a_who = asub.add_parser("whoami", help="Show the logged-in user")
    a_who.set_defaults(func=cmd_account_whoami)

    hist = sub.add_parser("history", help="Show or clear generated-password history")
    hist.add_argument("--clear", action="store_true", help="Clear the history")
    hist.set_defaults(func=cmd_history)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    args.settings = load_config()
    level = args.settings.get("log_level", "WARNING")
    if args.verbose:
        level = "DEBUG" if args.verbose > 1 else "INFO"
    setup_logging(level)

    try:
        return args.func(args)
    except PassForgeError as e:
        print(f"[red]{e}[/red]")
        return 2


if __name__ == "__main__":
    sys.exit(main())
