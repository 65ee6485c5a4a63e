"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.5KB, 3.2MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def seconds_to_human(seconds: float) -> str:
        """
        Convert a duration to a short string (e.g., 850ms, 12.4s, 3m 05s).
        """
        if seconds < 0:
            return "0ms"
        if seconds < 1:
            return f"{seconds * 1000:.0f}ms"
        if seconds < 60:
            return f"{seconds:.1f}s"
        minutes, secs = divmod(int(seconds), 60)
        return f"{minutes}m {secs:02d}s"

    @staticmethod
    def parse_yes_no(answer: str, default: bool = False) -> bool:
        """
        Interpret a prompt answer. Empty input yields `default`.
        """
        answer = (answer or "").strip().lower()
        if not answer:
            return default
        return answer in ("y", "yes", "true")
