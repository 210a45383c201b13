"""FastMCP server instance that the document tools register against."""

import logging

from fastmcp import FastMCP

from core.config import APP_NAME

logger = logging.getLogger(__name__)

server = FastMCP(name=APP_NAME)
