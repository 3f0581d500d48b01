from .lunar_service import GanzhiYear, LunarInfo, LunarService, ServiceConfig

__all__ = ["GanzhiYear", "LunarInfo", "LunarService", "ServiceConfig"]
