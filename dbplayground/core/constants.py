DEFAULT_VECTOR_DIMENSIONS = "1536"

CATALOG_SCHEMA = "public"

LOG_EXCLUDE_PATHS = [
    "/health",
    "/docs",
    "/openapi.json",
]

NL_SYSTEM_PROMPT = """You are a SQL expert. Convert natural language questions into PostgreSQL queries.
Only respond with the SQL query, no explanations.
Use proper SQL syntax and formatting.
Tables available: users, users2, document_chunks"""
