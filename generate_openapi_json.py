import json

from seqslice.server_main import customize_openapi_schema

with open("openapi.json", "w") as f:
    json.dump(customize_openapi_schema(), f, indent=2)
