import json

import pytest


@pytest.fixture
def config_blob():
    return json.dumps({"products": ["gid://P1"], "minQty": 2, "percentOff": 10})
