import os
from pathlib import Path
from datetime import datetime, timezone
import json
from .file_manager import FileManager

APP_NAME = "Octobuild"

class Logger:
    @staticmethod
    def log_dir() -> Path:
        return Path(os.getenv("LOCALAPPDATA", ".")) / APP_NAME / "logs"

    @staticmethod
    def log_event(data: dict):
        try:
            log_file = Logger.log_dir() / "last_build.json"

            json_data = json.dumps(data, indent=2, ensure_ascii=False)

            FileManager.write_to_file(log_file, json_data)
        except Exception as e:
            print(f"Failed to log event: {e}")

    @staticmethod
    def log_error(message: str):
        try:
            error_log_file = Logger.log_dir() / "errors.log"
            time_stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
            log_entry = f"[{time_stamp}] ERROR: {message}\n"

            FileManager.append_to_file(error_log_file, log_entry)
        except Exception as e:
            print(f"Failed to log error: {e}")
