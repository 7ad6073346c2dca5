from src.timetracker.timetracker.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use


def test_splitter_handles_quotes_and_comments():
    sql = """
    -- header; with semicolon
    CREATE TABLE a (x VARCHAR(10) DEFAULT 'a;b');
    INSERT INTO a VALUES ("c;d");
    """
    stmts = list(_iter_sql_statements(sql))
    assert len(stmts) == 2
    assert stmts[0].startswith("CREATE TABLE a")
    assert "'a;b'" in stmts[0]
    assert stmts[1] == 'INSERT INTO a VALUES ("c;d")'


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (id INT);"
    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]
