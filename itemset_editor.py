#!/usr/bin/env python3
"""
Item Set Editor for summoner preferences files
==============================================

Exports the custom item sets stored in a summoner preferences (.properties)
file to JSON, and puts edited item sets back with a recalculated checksum so
the client does not reject the file.

Usage:
    # Show item sets and checksum status
    python itemset_editor.py summoner.properties

    # Export item sets to JSON
    python itemset_editor.py summoner.properties -o itemsets.json --pretty

    # Import edited item sets (writes summoner.modified.properties)
    python itemset_editor.py summoner.properties --import itemsets.json

    # Only repair the checksum
    python itemset_editor.py summoner.properties --fix-checksum -o fixed.properties
"""

import sys
import os
import json
import argparse

from envelope_scanner import locate_document, parse_document
from envelope_writer import replace_checksum, replace_item_sets, verify_checksum
from itemset_checksum import calculate_total
from itemset_errors import ItemSetError
from itemset_model import Document


def format_hex(data: bytes) -> str:
    return ' '.join(f'{b:02X}' for b in data)


def read_file(path: str) -> bytes:
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, 'rb') as f:
        return f.read()


def write_file(path: str, data: bytes):
    with open(path, 'wb') as f:
        f.write(data)
    print(f"Output: {path} ({len(data):,} bytes)")


def default_output(path: str) -> str:
    base, ext = os.path.splitext(path)
    return f"{base}.modified{ext}"


# =============================================================================
# COMMANDS
# =============================================================================

def show_summary(properties: bytes, verbose: bool = False) -> Document:
    """Print where the item sets are and whether the checksum is valid"""
    span = locate_document(properties)
    document = parse_document(properties[span.start:span.end])
    stored, calculated = verify_checksum(properties)

    print("=" * 70)
    print("Item Sets")
    print("=" * 70)
    print(f"Marker at:        0x{span.marker:04X}")
    print(f"Document:         0x{span.start:04X} - 0x{span.end:04X} ({span.end - span.start:,} bytes)")
    print(f"Header width:     {span.header_width} bytes")
    print(f"Stored checksum:  {format_hex(stored)}")
    print(f"Calculated:       {format_hex(calculated)}")
    print(f"Checksum:         {'PASS' if stored == calculated else 'FAIL'}")
    print(f"Item sets:        {len(document.item_sets)}")

    for index, item_set in enumerate(document.item_sets, 1):
        item_count = sum(len(block.items) for block in item_set.blocks)
        print(f"  {index:3d}. {item_set.title!r} ({len(item_set.blocks)} blocks, {item_count} items)")
        if verbose:
            print(f"       maps: {item_set.associated_maps}  champions: {item_set.associated_champions}")
            for block in item_set.blocks:
                print(f"       [{block.type}] {[item.id for item in block.items]}")

    if verbose:
        print(f"Raw total:        {calculate_total(document)}")

    return document


def export_item_sets(properties: bytes, output: str, pretty: bool = False):
    span = locate_document(properties)
    document = parse_document(properties[span.start:span.end])

    with open(output, 'w', encoding='utf-8') as f:
        json.dump(document.to_dict(), f, indent=2 if pretty else None, ensure_ascii=False)
    print(f"Exported {len(document.item_sets)} item sets to {output}")


def import_item_sets(properties: bytes, json_path: str, output: str):
    with open(json_path, 'r', encoding='utf-8') as f:
        document = Document.from_dict(json.load(f))

    new_data = replace_item_sets(properties, document)
    stored, _ = verify_checksum(new_data)
    print(f"Imported {len(document.item_sets)} item sets, checksum {format_hex(stored)}")
    write_file(output, new_data)


def fix_checksum(properties: bytes, output: str):
    stored, calculated = verify_checksum(properties)
    if stored == calculated:
        print(f"Checksum already valid ({format_hex(stored)})")
    else:
        print(f"Checksum: {format_hex(stored)} -> {format_hex(calculated)}")

    write_file(output, replace_checksum(properties))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Export, import and re-checksum item sets in summoner preferences files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s summoner.properties                          # Show item sets
  %(prog)s summoner.properties -o itemsets.json         # Export to JSON
  %(prog)s summoner.properties --import itemsets.json   # Import edited JSON
  %(prog)s summoner.properties --fix-checksum           # Repair checksum only
        """)
    parser.add_argument('input', help='Input preferences file')
    parser.add_argument('-o', '--output',
                        help='Output file (JSON when exporting, preferences file otherwise)')
    parser.add_argument('-i', '--import', dest='import_json', metavar='JSON',
                        help='Replace the item sets with the contents of this JSON file')
    parser.add_argument('--fix-checksum', action='store_true',
                        help='Recalculate the checksum without changing the item sets')
    parser.add_argument('--pretty', action='store_true', help='Indent exported JSON')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    args = parser.parse_args(argv)

    if args.import_json and args.fix_checksum:
        print("ERROR: --import and --fix-checksum cannot be combined")
        return 1

    try:
        properties = read_file(args.input)

        if args.import_json:
            import_item_sets(properties, args.import_json, args.output or default_output(args.input))
        elif args.fix_checksum:
            fix_checksum(properties, args.output or default_output(args.input))
        else:
            show_summary(properties, args.verbose)
            if args.output:
                export_item_sets(properties, args.output, args.pretty)
        return 0
    except (ItemSetError, OSError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
