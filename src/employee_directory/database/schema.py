"""
Schema bootstrap for the employees table
"""

import logging

from employee_directory.database.connection import DatabaseConnection

logger = logging.getLogger(__name__)

EMPLOYEES_TABLE_DDL = """
    CREATE TABLE IF NOT EXISTS employees (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        email VARCHAR(255) NOT NULL UNIQUE,
        phone VARCHAR(50),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


async def init_schema(database: DatabaseConnection) -> None:
    """Create the employees table if it does not exist yet"""
    await database.execute(EMPLOYEES_TABLE_DDL)
    logger.info("Employees table ready")
