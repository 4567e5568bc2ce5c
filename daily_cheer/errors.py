"""
Error taxonomy for Daily Cheer

CLI 只攔截 DailyCheerError，其餘例外直接往外拋。
"""


class DailyCheerError(Exception):
    """所有可預期錯誤的基底類別"""


class ConfigError(DailyCheerError):
    """缺少 video id、憑證或輸入檔案（在任何網路呼叫前失敗）"""


class FetchError(DailyCheerError):
    """留言抓取失敗（網路、授權、quota）"""


class UploadError(DailyCheerError):
    """影片上傳失敗"""


class LedgerError(DailyCheerError):
    """Status ledger 存在但無法讀取"""


class RenderError(DailyCheerError):
    """Renderer subprocess 失敗"""
