"""
Core - 配置、数据库连接、模型和公共工具
"""
