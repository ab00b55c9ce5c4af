import copy
import yaml
from main import app  # Import your FastAPI app


def build_openapi_schema() -> dict:
    # Generate the OpenAPI schema
    openapi_schema = copy.deepcopy(app.openapi())

    # Force OpenAPI version to 3.0.0
    openapi_schema["openapi"] = "3.0.0"

    # Add a custom info section
    openapi_schema["info"] = {
        "title": "OghmAI Dictionary API",
        "description": "Multilingual (English, Malay, Chinese) dictionary lookup backed by Bedrock",
        "version": "1.0.0"
    }

    # Rename schemas to remove hyphens and underscores
    if "components" in openapi_schema and "schemas" in openapi_schema["components"]:
        renames = {name: name.replace("-", "").replace("_", "") for name in openapi_schema["components"]["schemas"]}
        openapi_schema["components"]["schemas"] = {
            renames[name]: content for name, content in openapi_schema["components"]["schemas"].items()
        }
        _rewrite_refs(openapi_schema, renames)

    # Add integration to each method
    for path, methods in openapi_schema["paths"].items():
        for method, details in methods.items():
            details["x-amazon-apigateway-integration"] = {
                "uri": "${lambda_arn}",
                "httpMethod": "POST",
                "type": "aws_proxy"
            }

            # Simplify responses
            if "responses" in details:
                for status_code, response in details["responses"].items():
                    response["content"] = {
                        "application/json": {}
                    }

    return openapi_schema


def _rewrite_refs(node, renames: dict):
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/components/schemas/"):
            name = ref.rsplit("/", 1)[-1]
            node["$ref"] = f"#/components/schemas/{renames.get(name, name)}"
        for value in node.values():
            _rewrite_refs(value, renames)
    elif isinstance(node, list):
        for value in node:
            _rewrite_refs(value, renames)


if __name__ == "__main__":
    # Save the schema to a YAML file
    with open("openapi.yaml", "w") as f:
        yaml.dump(build_openapi_schema(), f, default_flow_style=False)

    print("OpenAPI schema has been generated and saved to openapi.yaml")
