import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the command line tools attach, so no test writes to a stale stream."""
    yield
    logger = logging.getLogger("arf_tools")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def catalog():
    """A small well-formed catalog tree."""
    return {
        "type": "folder",
        "children": [
            {
                "name": "Tools",
                "type": "folder",
                "children": [
                    {"name": "Nmap", "type": "url", "url": "https://nmap.org/"},
                    {
                        "name": "Web",
                        "type": "folder",
                        "children": [
                            {"name": "Burp", "type": "url", "url": "https://portswigger.net/burp"},
                        ],
                    },
                ],
            },
            {"name": "Wiki", "type": "url", "url": "https://en.wikipedia.org/"},
        ],
    }
