"""errchain traceback demo: what you see when an annotated error surfaces.

Run with: uv run python examples/traceback_demo.py

Shows the three output forms:
  - render(err)                : origin-first text trace
  - render(err, reversed=True) : most recent caller first, same labels
  - to_dict(err)               : JSON payload for log shippers
"""

import json
from dataclasses import dataclass

from errchain import annotate, details_as, render, to_dict, with_details, wrap


@dataclass(frozen=True)
class Account:
    account_id: str
    frozen: bool


class PayoutDeclined(Exception):
    pass


# -- programs ----------------------------------------------------------------


def load_account(account_id):
    return Account(account_id=account_id, frozen=True)


def check_account(account):
    if account.frozen:
        err = with_details(PayoutDeclined("Payout cannot be processed"), account)
        return annotate(err)
    return None


def handle_payout(account_id):
    account = load_account(account_id)
    err = check_account(account)
    if err is not None:
        return wrap(err, "account is actually frozen")
    return None


def batch_payouts(account_ids):
    for account_id in account_ids:
        err = handle_payout(account_id)
        if err is not None:
            return wrap(err, f"batch stopped at {account_id}")
    return None


# -- demo runner --------------------------------------------------------------


def main():
    err = batch_payouts(["acc-1", "acc-2"])

    print("=== render ===")
    print(render(err))
    print()
    print("=== render (reversed) ===")
    print(render(err, reversed=True))
    print()
    print("=== to_dict ===")
    print(json.dumps(to_dict(err), indent=2))
    print()
    print("=== details ===")
    for account in details_as(err, Account) or ():
        print(f"{account.account_id}: frozen={account.frozen}")


if __name__ == "__main__":
    main()
