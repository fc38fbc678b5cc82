import os

TEST_FILE_DIR = os.path.join(os.path.dirname(__file__), "test_files")


def get_test_path(file_name: str) -> str:
    return os.path.join(TEST_FILE_DIR, file_name)


def get_test_file(file_name: str) -> str:
    """Helper function to open and read test files."""
    with open(get_test_path(file_name), "r", encoding="utf-8") as f:
        text = f.read()
    return text
