"""Command line entry point: solve A x = b for a Matrix Market matrix."""

from __future__ import annotations

import argparse
import sys
import time

import numpy as np

from .distributed import CGSolverSparseDistributed
from .mmio import MatrixMarketError
from .solver import DEFAULT_TOLERANCE, CGSolverDense, CGSolverSparse


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cgsolver",
        description="Run the conjugate gradient method on a Matrix Market matrix.",
    )
    parser.add_argument("matrix", help="path to a .mtx file")
    parser.add_argument(
        "--solver",
        choices=("sparse", "dense", "distributed"),
        default="sparse",
        help="matrix storage and solver to use (default: sparse)",
    )
    parser.add_argument(
        "-np",
        "--processes",
        type=int,
        default=1,
        help="number of workers for the distributed solver",
    )
    parser.add_argument("--tolerance", type=float, default=DEFAULT_TOLERANCE)
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    if args.processes < 1:
        print("cgsolver: --processes must be at least 1", file=sys.stderr)
        return 1

    if args.solver == "distributed":
        solver = CGSolverSparseDistributed(args.processes, tolerance=args.tolerance)
    elif args.solver == "dense":
        solver = CGSolverDense(tolerance=args.tolerance)
    else:
        solver = CGSolverSparse(tolerance=args.tolerance)

    try:
        solver.read_matrix(args.matrix)
    except MatrixMarketError as exc:
        print(f"cgsolver: {exc}", file=sys.stderr)
        return 1

    n, m = solver.n, solver.m
    h = 1.0 / n if n else float("inf")
    solver.init_source_term(h)
    x = np.zeros(n)

    kind = "dense" if args.solver == "dense" else "sparse"
    print(f"Call CG {kind} on matrix size {m} x {n})")
    start = time.perf_counter()
    solver.solve(x)
    elapsed = time.perf_counter() - start
    shown = f"{elapsed:.6e}" if solver.verbose else f"{elapsed}"
    if args.solver == "distributed":
        print(f"Solution time: {shown} seconds")
    else:
        print(f"Time for CG ({kind} solver)  = {shown} [s]")
    return 0


if __name__ == "__main__":
    sys.exit(main())