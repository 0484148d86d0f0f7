#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Portfolio Desk 看板报告

从 JSON 持仓快照构建看板，输出 markdown 报告。

用法:
    python scripts/portfolio_report.py                         # 读取 data/holdings.json
    python scripts/portfolio_report.py holdings.json --window 1W
    python scripts/portfolio_report.py holdings.json --select TCS --seed 42
    python scripts/portfolio_report.py holdings.json --invested 150000
"""

import sys
import json
import argparse
import logging
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import HOLDINGS_FILE, DEFAULT_WINDOW, SERIES_WINDOWS
from portfolio.holdings import Holding, PortfolioError
from portfolio.metrics import ReturnBaseline
from portfolio.dashboard import PortfolioDashboard, generate_dashboard_report

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


def load_snapshot(path: Path) -> List[Holding]:
    """Read a list of holding dicts from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("holdings", [])
    return [Holding.from_dict(d) for d in data]


def main():
    parser = argparse.ArgumentParser(description="Print the portfolio dashboard report")
    parser.add_argument("holdings", nargs="?", default=str(HOLDINGS_FILE),
                        help=f"Holdings JSON file (default: {HOLDINGS_FILE})")
    parser.add_argument("--window", choices=SERIES_WINDOWS, default=DEFAULT_WINDOW,
                        help=f"Chart window (default: {DEFAULT_WINDOW})")
    parser.add_argument("--select", type=str, help="Symbol to chart")
    parser.add_argument("--seed", type=int, help="Random seed for the chart series")
    parser.add_argument("--invested", type=float, help="Cost basis for total return")
    args = parser.parse_args()

    path = Path(args.holdings)
    if not path.exists():
        logger.error(f"Holdings file not found: {path}")
        sys.exit(1)

    baseline = ReturnBaseline(invested=args.invested) if args.invested else None
    try:
        dashboard = PortfolioDashboard(load_snapshot(path), baseline=baseline)
        if args.select:
            dashboard.select_symbol(args.select)
    except (PortfolioError, json.JSONDecodeError) as e:
        logger.error(f"Failed to build dashboard from {path}: {e}")
        sys.exit(1)

    logger.info(f"Loaded {len(dashboard.store)} holdings from {path}")
    print(generate_dashboard_report(dashboard, window=args.window, rng=args.seed))


if __name__ == "__main__":
    main()
