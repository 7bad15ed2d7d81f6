#!/usr/bin/env python3

import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent.resolve()
sys.path.append(str(ROOT))

from typing import get_type_hints

from lazydocs import MarkdownGenerator
from utf8str import Codec, Config, char, sequence
from utf8str.codec import docs as config_docs

# Config Docs

docs = """

### Config

| Parameter | Type  | Description | Default |
| :-------- | :---- | :---------- | :------ |
"""
for param, description in config_docs.items():
    type_ = get_type_hints(Config)[param].__name__
    default = getattr(Config, param)
    docs += f"| `{param}` | `{type_}` | {description} | `{default}` |\n"

# Function Docs

generator = MarkdownGenerator()
for module in (char, sequence):
    docs += f"\n### {module.__name__}\n\n"
    for name in sorted(dir(module)):
        fn = getattr(module, name)
        if name.startswith("_") or not callable(fn):
            continue
        if getattr(fn, "__module__", None) != module.__name__:
            continue
        docs += generator.func2md(fn, depth=4)

# Class Docs

docs += generator.class2md(Codec, depth=3)

# Save

README = ROOT / "README.md"
MARKER = "<!-- API_DOCS -->"

with open(README) as f:
    contents = f.read()

parts = contents.split(MARKER)
if len(parts) != 3:
    raise RuntimeError(
        f"README should have exactly 2 '{MARKER}' but has {len(parts) - 1}."
    )
parts[1] = docs
contents = MARKER.join(parts)

with open(README, mode="w") as f:
    f.write(contents)
