#!/usr/bin/env python3
"""
Quick Start Guide for slim-xml.

Walks through parsing a document, editing the tree, switching output layout
and handling malformed input.
"""

import sys
import tempfile
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from slim_xml import (
    MalformedXmlError,
    XmlDocument,
    XmlElement,
    parse,
    serialize,
)

CATALOG = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes" ?>\n'
    "<catalog><book id='b1'><title>Dune</title><author>Herbert</author></book>"
    "<book id='b2'><title>Solaris</title><reprint/></book></catalog>"
)


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - slim-xml")
    print("=" * 45)

    # Step 1: Parse a document
    print("\n📄 Step 1: Parsing")
    print("-" * 30)

    document = parse(CATALOG)
    books = document.equal_range("book")
    print(f"✅ Root element: {document.root.name}")
    print(f"📚 Books found: {len(books)}")
    for book in books:
        print(f"  - {book.get_attribute('id')}: {book.find('title').value}")

    # Step 2: Edit the tree
    print("\n✏️  Step 2: Editing")
    print("-" * 30)

    book = XmlElement("book")
    book.set_attribute("id", "b3")
    book.append_child(XmlElement("title", "Foundation"))
    document.root.append_child(book)
    print(f"✅ Books now: {len(document.equal_range('book'))}")

    # Step 3: Serialize in both layouts
    print("\n🖨️  Step 3: Serializing")
    print("-" * 30)

    print(serialize(document.root))
    document.set_beautify_output()
    print(document.to_string())

    # Step 4: Save and load
    print("\n💾 Step 4: Files")
    print("-" * 30)

    with tempfile.TemporaryDirectory() as directory:
        path = Path(directory) / "catalog.xml"
        document.save_to_file(path)
        reloaded = XmlDocument.from_file(path)
        print(f"✅ Reloaded tree equal: {reloaded.root == document.root}")

    # Step 5: Malformed input
    print("\n⚠️  Step 5: Malformed input")
    print("-" * 30)

    try:
        parse("<tag attr=oops>x</tag>")
    except MalformedXmlError as e:
        print(f"❌ {e} (tag: {e.tag_name})")


if __name__ == "__main__":
    quick_start_example()
