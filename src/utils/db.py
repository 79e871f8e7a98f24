import duckdb

class DatabaseManager:
    """In-memory DuckDB connection holding the cleaned incident table."""

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self.conn = None

    def connect(self):
        if not self.conn:
            self.conn = duckdb.connect(self.db_path)
        return self.conn

    def register_incidents(self, df, name: str = "incidents"):
        conn = self.connect()
        conn.register(name, df)
        return conn

    def close(self):
        if self.conn:
            self.conn.close()
            self.conn = None
