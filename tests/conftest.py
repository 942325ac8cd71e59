import pytest


USERS_CSV = """name,age,country
Alice,34,Finland
Bob,29,USA
Carol,41,Brazil
"""


@pytest.fixture
def write_csv(tmp_path):
    def _write(text, name="users.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def users_csv(write_csv):
    return write_csv(USERS_CSV)
