from pathlib import Path
import os



PRIVATE_FILE_MODE = 0o600



def write_private_file(file_path: Path, content: str | bytes) -> None:
    data = content.encode("utf-8") if isinstance(content, str) else content
    fd = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PRIVATE_FILE_MODE)
    with os.fdopen(fd, "wb") as file:
        file.write(data)
    # O_CREAT only applies the mode to new files
    os.chmod(file_path, PRIVATE_FILE_MODE)
