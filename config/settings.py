"""
Portfolio Desk 配置 (holdings, metrics, series)
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent

# 自动加载 .env（本地覆盖项）
load_dotenv(PROJECT_ROOT / ".env")

# 数据目录 (CLI 读取初始持仓快照)
DATA_DIR = PROJECT_ROOT / "data"
HOLDINGS_FILE = DATA_DIR / "holdings.json"

# 行业分类 (编辑表单的固定列表，也是分布图的默认排序)
SECTORS = [
    "Technology",
    "Finance",
    "Healthcare",
    "Energy",
    "Consumer Goods",
    "Industrial",
    "Materials",
    "Real Estate",
    "Telecommunications",
    "Utilities",
]

# 持仓类型 (只透传，不参与聚合)
STOCK_TYPES = ["Common Stock", "Preferred Stock", "ETF", "Mutual Fund"]

# 货币显示
CURRENCY_SYMBOL = os.environ.get("PORTFOLIO_CURRENCY_SYMBOL", "₹")

# 走势图配置
SERIES_WINDOWS = ["1D", "1W", "1M", "3M", "1Y"]
DEFAULT_WINDOW = os.environ.get("PORTFOLIO_DEFAULT_WINDOW", "1M")

# 固定随机种子 (空 = 每次随机)
_seed = os.environ.get("PORTFOLIO_SERIES_SEED", "").strip()
SERIES_SEED = int(_seed) if _seed else None

# Top Movers 面板显示数量
TOP_MOVERS_N = int(os.environ.get("PORTFOLIO_TOP_MOVERS_N", "3"))

# 变更历史保留条数 (超出后丢弃最旧记录)
HISTORY_MAXLEN = int(os.environ.get("PORTFOLIO_HISTORY_MAXLEN", "1000"))
