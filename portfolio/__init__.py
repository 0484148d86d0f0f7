"""
Portfolio Desk — 持仓管理、组合指标、走势序列

Modules:
- holdings: 持仓集合 (CRUD, validation, audit trail)
- metrics: 组合汇总 KPI + 行业分布 + 涨跌榜
- series: 个股/组合走势序列 (可注入随机源)
- selection: 当前选中持仓的状态机
- dashboard: 门面 + 文本报告 + 货币/百分比格式化
"""
