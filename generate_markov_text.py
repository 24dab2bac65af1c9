#!/usr/bin/env python3
"""
Generate text from a first-order Markov chain trained on the input.

Usage:
    python generate_markov_text.py corpus.txt --length 50 --seed 7
    cat corpus.txt | python generate_markov_text.py

Optional config YAML (all keys optional):

walk_length: 50
max_input_bytes: 555000
seed: 1234
edge_direction: forward   # or "reverse"
start_token: "The"

Environment variables (a .env file beside this script is loaded first)
override the YAML: MARKOV_SEED, MARKOV_WALK_LENGTH, MARKOV_EDGE_DIRECTION.
Command-line flags override both.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional, TextIO

import yaml
from dotenv import load_dotenv

from markov_pipeline.chain import build_markov_chain
from markov_pipeline.config import GeneratorConfig, load_config
from markov_pipeline.errors import EmptyInputError
from markov_pipeline.graph import EdgeDirection
from markov_pipeline.io_utils import read_bounded_input, write_json
from markov_pipeline.tokenizer import token_to_string, tokenize
from markov_pipeline.walk import render_walk

REPO_ROOT = Path(__file__).resolve().parent


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Generate text by random walk over a bigram Markov chain")
    ap.add_argument("input", type=Path, nargs="?", help="Source text file (default: stdin)")
    ap.add_argument("--config", type=Path, help="YAML file with generator settings")
    ap.add_argument("--length", type=int, help="Number of tokens to generate (default: 50)")
    ap.add_argument("--seed", type=int, help="Seed for the random source (default: unseeded)")
    ap.add_argument("--start", help="Token to start the walk from (default: first input token)")
    ap.add_argument(
        "--direction",
        choices=[member.value for member in EdgeDirection],
        help="Record bigrams earlier->later (forward, default) or later->earlier (reverse)",
    )
    ap.add_argument("--max-bytes", type=int, help="Input read ceiling in bytes (default: 555000)")
    ap.add_argument("--summary-json", type=Path, help="Optional path to write chain statistics as JSON")
    ap.add_argument("--progress", action="store_true", help="Show a progress bar while recording bigrams")
    ap.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return ap


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    config = load_config(args.config)
    return config.with_overrides(
        walk_length=args.length,
        seed=args.seed,
        start_token=args.start,
        edge_direction=args.direction,
        max_input_bytes=args.max_bytes,
    )


def main(argv: Optional[List[str]] = None, *, stdout: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    out = stdout if stdout is not None else sys.stdout

    load_dotenv(REPO_ROOT / ".env")
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    logger = logging.getLogger("markov")

    try:
        config = resolve_config(args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    if args.input is not None and not args.input.exists():
        logger.error("Input file not found: %s", args.input)
        return 1

    try:
        text = read_bounded_input(args.input, max_bytes=config.max_input_bytes)
    except EmptyInputError as exc:
        logger.error("%s", exc)
        return 1
    except OSError as exc:
        logger.error("Could not read input %s: %s", args.input, exc)
        return 1

    tokens = tokenize(text)
    logger.info("Loaded %d tokens", len(tokens))
    if not tokens:
        logger.error("Input contains no tokens")
        return 1

    chain = build_markov_chain(tokens, direction=config.edge_direction, progress=args.progress)
    try:
        if config.walk_length > 1 and len(chain.keys) == 0:
            logger.error("Input needs at least two tokens to build any transitions")
            return 1

        start = config.start_token if config.start_token is not None else token_to_string(tokens[0])
        if start not in chain.keys:
            logger.warning("Start token %r has no outgoing edges; the walk will teleport", start)

        rng = random.Random(config.seed)
        walk = chain.generate(start, config.walk_length, rng)
        out.write(render_walk(walk))

        if args.summary_json:
            write_json(args.summary_json, chain.summary())
            logger.info("Wrote chain summary: %s", args.summary_json)
    finally:
        chain.release()
    return 0


if __name__ == "__main__":
    sys.exit(main())
