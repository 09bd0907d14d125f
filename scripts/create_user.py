#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from loginapp.auth.passwords import PasswordHasher
from loginapp.auth.service import AuthService, SignupSucceeded
from loginapp.config import Settings
from loginapp.infra.account_repo import AccountRepository, connect


def main() -> None:
    settings = Settings.from_env()
    service = AuthService(
        store=AccountRepository(connect(settings)),
        hasher=PasswordHasher(time_cost=settings.hash_time_cost),
    )

    username = input("Username: ").strip()
    email = input("Email: ").strip()

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    outcome = service.signup(username, pw1, email)
    if not isinstance(outcome, SignupSucceeded):
        raise SystemExit(f"Signup failed: {outcome.reason}")
    print(f"OK -> {settings.mongo_collection} ({outcome.account.id})")


if __name__ == "__main__":
    main()
