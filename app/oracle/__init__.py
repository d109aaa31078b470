from app.oracle.base import BaseOracle
from app.oracle.factory import OracleFactory
from app.oracle.oracle import LlmOracle

__all__ = ["BaseOracle", "LlmOracle", "OracleFactory"]
