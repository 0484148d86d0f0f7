"""
共享测试夹具: 示例持仓 + 空仓 store。

所有测试都在内存中构建 HoldingsStore，不读写 data/ 目录。
"""
import sys
from datetime import datetime
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from portfolio.holdings import Holding, HoldingsStore

# 2026-10-19 是周一
FIXED_NOW = datetime(2026, 10, 19, 14, 30)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def rng():
    """固定随机源，输出可复现。"""
    return np.random.default_rng(42)


@pytest.fixture
def tech_energy():
    """两只持仓: 价值各 1000，涨跌 +10% / -5%。"""
    return [
        Holding(symbol="TCS", name="Tata Consultancy Services Ltd.", price=100.0,
                change_percent=10.0, shares=10, sector="Tech"),
        Holding(symbol="RELIANCE", name="Reliance Industries Ltd.", price=50.0,
                change_percent=-5.0, shares=20, sector="Energy"),
    ]


@pytest.fixture
def sample_holdings():
    return [
        Holding(symbol="TCS", name="Tata Consultancy Services Ltd.", price=3500.0,
                change_percent=1.2, shares=10, sector="Technology"),
        Holding(symbol="INFY", name="Infosys Ltd.", price=1500.0,
                change_percent=-0.8, shares=20, sector="Technology"),
        Holding(symbol="HDFCBANK", name="HDFC Bank Ltd.", price=1600.0,
                change_percent=0.5, shares=15, sector="Finance"),
        Holding(symbol="RELIANCE", name="Reliance Industries Ltd.", price=2400.0,
                change_percent=-2.1, shares=8, sector="Energy", type="Common Stock"),
        Holding(symbol="NIFTYBEES", name="Nippon India Nifty ETF", price=250.0,
                change_percent=0.3, shares=40, sector="Index Funds", type="ETF"),
    ]


@pytest.fixture
def store(sample_holdings):
    return HoldingsStore(sample_holdings)


@pytest.fixture
def empty_store():
    return HoldingsStore()
