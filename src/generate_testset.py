#!/usr/bin/env python3
"""
Generate a large input file for load testing the payments engine.

Every client gets the same nine rows: a deposit that is disputed and resolved,
a withdrawal that is disputed and resolved, and a deposit that is disputed and
charged back. Each client therefore ends with available=0.5, held=0,
total=0.5, locked=true.
"""
import argparse
import csv
from decimal import Decimal
from typing import Iterator, List

DEFAULT_CLIENTS = 10_000
DEPOSIT_AMOUNT = Decimal("2.0")
WITHDRAWAL_AMOUNT = Decimal("1.5")


def client_rows(client_id: int, first_tx_id: int) -> List[list]:
    deposit_tx = first_tx_id
    withdrawal_tx = first_tx_id + 1
    chargeback_tx = first_tx_id + 2
    return [
        ["deposit", client_id, deposit_tx, DEPOSIT_AMOUNT],
        ["dispute", client_id, deposit_tx, ""],
        ["resolve", client_id, deposit_tx, ""],
        ["withdrawal", client_id, withdrawal_tx, WITHDRAWAL_AMOUNT],
        ["dispute", client_id, withdrawal_tx, ""],
        ["resolve", client_id, withdrawal_tx, ""],
        ["deposit", client_id, chargeback_tx, DEPOSIT_AMOUNT],
        ["dispute", client_id, chargeback_tx, ""],
        ["chargeback", client_id, chargeback_tx, ""],
    ]


def generate_rows(num_clients: int) -> Iterator[list]:
    tx_id = 0
    for client_id in range(num_clients):
        yield from client_rows(client_id, tx_id)
        tx_id += 3


def write_testset(path: str, num_clients: int = DEFAULT_CLIENTS) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(["type", "client", "tx", "amount"])
        writer.writerows(generate_rows(num_clients))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("output", help="path of the CSV file to write")
    parser.add_argument("--clients", type=int, default=DEFAULT_CLIENTS, help="number of distinct clients (max 65536)")
    args = parser.parse_args(argv)

    if not 0 < args.clients <= 2**16:
        parser.error("--clients must be between 1 and 65536")

    write_testset(args.output, args.clients)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
