import argparse
import json
from pathlib import Path

from library_api.main import app

DEFAULT_OUTPUT_DIR = Path("docs")


def main(output_dir: Path = DEFAULT_OUTPUT_DIR) -> Path:
    """Writes the service's OpenAPI document to ``<output_dir>/openapi.json``."""
    schema = app.openapi()
    output_dir.mkdir(parents=True, exist_ok=True)

    output_path = output_dir / "openapi.json"
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, sort_keys=True)
        f.write("\n")

    info = schema["info"]
    print(f"OpenAPI document for {info['title']} {info['version']} written to {output_path}")
    return output_path


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Export the library API OpenAPI document.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Directory that receives openapi.json",
    )
    args = parser.parse_args()
    main(output_dir=args.output_dir)
