from __future__ import annotations

import re

NO_EXTENSION_LABEL = "(no extension)"

# extension (lower-case, no dot) -> display label
LANGUAGE_LABELS: dict[str, str] = {
    "js": "JavaScript",
    "mjs": "JavaScript",
    "cjs": "JavaScript",
    "ts": "TypeScript",
    "jsx": "JSX",
    "tsx": "TSX",
    "py": "Python",
    "pyx": "Cython",
    "pxd": "Cython",
    "pxi": "Cython",
    "go": "Go",
    "rb": "Ruby",
    "rake": "Ruby",
    "gemfile": "Ruby",
    "gemspec": "Ruby",
    "java": "Java",
    "kt": "Kotlin",
    "kts": "Kotlin",
    "swift": "Swift",
    "rs": "Rust",
    "c": "C",
    "h": "C/C++",
    "hh": "C/C++",
    "hpp": "C/C++",
    "hxx": "C/C++",
    "cc": "C/C++",
    "cpp": "C/C++",
    "cxx": "C/C++",
    "cs": "C#",
    "fs": "F#",
    "fsx": "F#",
    "fsi": "F#",
    "php": "PHP",
    "html": "HTML",
    "htm": "HTML",
    "css": "CSS",
    "scss": "CSS/SCSS",
    "sass": "CSS/SCSS",
    "less": "CSS/SCSS",
    "md": "Markdown",
    "mdx": "Markdown",
    "yml": "YAML",
    "yaml": "YAML",
    "json": "JSON",
    "jsonc": "JSON",
    "json5": "JSON",
    "sql": "SQL",
    "sh": "Shell",
    "bash": "Shell",
    "zsh": "Shell",
    "fish": "Shell",
    "toml": "TOML",
    "xml": "XML",
    "xsl": "XML",
    "xslt": "XML",
    "vue": "Vue",
    "svelte": "Svelte",
    "astro": "Astro",
    "lua": "Lua",
    "r": "R",
    "jl": "Julia",
    "ex": "Elixir",
    "exs": "Elixir",
    "erl": "Erlang",
    "hrl": "Erlang",
    "hs": "Haskell",
    "lhs": "Haskell",
    "ml": "OCaml",
    "mli": "OCaml",
    "clj": "Clojure",
    "cljs": "Clojure",
    "cljc": "Clojure",
    "edn": "Clojure",
    "scala": "Scala",
    "sc": "Scala",
    "groovy": "Groovy",
    "gvy": "Groovy",
    "gy": "Groovy",
    "gsh": "Groovy",
    "dart": "Dart",
    "zig": "Zig",
    "nim": "Nim",
    "v": "V",
    "cr": "Crystal",
    "pl": "Perl",
    "pm": "Perl",
    "tf": "Terraform",
    "tfvars": "Terraform",
    "proto": "Protobuf",
    "graphql": "GraphQL",
    "graphqls": "GraphQL",
    "gql": "GraphQL",
    "prisma": "Prisma",
    "sol": "Solidity",
    "move": "Move",
    "cairo": "Cairo",
    "ipynb": "Jupyter",
    "tex": "LaTeX",
    "latex": "LaTeX",
    "rst": "reStructuredText",
    "org": "Org",
    "txt": "Text",
    "csv": "CSV",
    "lock": "Lockfile",
    "dockerfile": "Dockerfile",
    "dockerignore": "Docker",
    "makefile": "Makefile",
    "mk": "Makefile",
    "cmake": "CMake",
    "gradle": "Gradle",
    "properties": "Properties",
    "ini": "Config",
    "cfg": "Config",
    "conf": "Config",
    "eslintrc": "Config",
    "prettierrc": "Config",
    "babelrc": "Config",
    "nvmrc": "Config",
    "npmrc": "Config",
    "yarnrc": "Config",
    "env": "Env",
    "gitignore": "Git",
    "gitattributes": "Git",
    "editorconfig": "EditorConfig",
    "pbxproj": "Xcode",
    "xcscheme": "Xcode",
    "xcworkspacedata": "Xcode",
    "xcuserstate": "Xcode",
    "xcbkptlist": "Xcode",
    "xcconfig": "Xcode",
    "storyboard": "Xcode",
    "xib": "Xcode",
    "plist": "Plist",
    "entitlements": "Plist",
    "strings": "Strings",
    "stringsdict": "Strings",
    "modulemap": "Modulemap",
    "podspec": "CocoaPods",
    "svg": "SVG",
    "png": "Image",
    "jpg": "Image",
    "jpeg": "Image",
    "gif": "Image",
    "webp": "Image",
    "ico": "Image",
    "icns": "Image",
    "woff": "Font",
    "woff2": "Font",
    "ttf": "Font",
    "otf": "Font",
    "eot": "Font",
    "mp3": "Audio",
    "wav": "Audio",
    "ogg": "Audio",
    "flac": "Audio",
    "m4a": "Audio",
    "mp4": "Video",
    "mov": "Video",
    "avi": "Video",
    "mkv": "Video",
    "webm": "Video",
    "pdf": "PDF",
    "zip": "Archive",
    "tar": "Archive",
    "gz": "Archive",
    "rar": "Archive",
    "7z": "Archive",
    "snap": "Snapshot",
}


_C_ESCAPE_RE = re.compile(rb"\\([0-7]{3}|.)", re.DOTALL)
_C_ESCAPES = {b"a": b"\a", b"b": b"\b", b"f": b"\f", b"n": b"\n", b"r": b"\r", b"t": b"\t", b"v": b"\v"}


def unquote_path(path: str) -> str:
    """
    Undo git's C-style quoting (`"caf\\303\\251.py"` -> `café.py`). Unquoted
    paths are returned as-is.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    def _sub(m: re.Match[bytes]) -> bytes:
        esc = m.group(1)
        if len(esc) == 3:
            return bytes([int(esc, 8) & 0xFF])
        return _C_ESCAPES.get(esc, esc)

    raw = _C_ESCAPE_RE.sub(_sub, path[1:-1].encode("utf-8"))
    return raw.decode("utf-8", errors="replace")


def normalize_numstat_path(path: str) -> str:
    p = unquote_path(path.strip())
    # `git log --numstat` may render renames like: src/{old => new}/file.py or src/{old.py => new.py}
    if " => " in p:
        if "{" in p and "}" in p:
            head, rest = p.split("{", 1)
            inner, tail = rest.split("}", 1)
            new = inner.split(" => ")[-1]
            p = (head + new + tail).replace("//", "/")
        else:
            p = p.split(" => ")[-1]
    return p.strip()


def extension_for_path(path: str) -> str | None:
    """
    Text after the last period of the file name, or None when the name has no
    period (or ends with one). Dotfiles such as `.gitignore` yield `gitignore`.
    """
    p = path.replace("\\", "/")
    base = p.rsplit("/", 1)[-1]
    if "." not in base:
        return None
    ext = base.rsplit(".", 1)[-1]
    return ext or None


def language_label(extension: str | None) -> str:
    if extension is None:
        return NO_EXTENSION_LABEL
    label = LANGUAGE_LABELS.get(extension.lower())
    if label is not None:
        return label
    return extension.upper()
