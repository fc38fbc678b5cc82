"""Print everything decoded from an invitation."""

from argparse import ArgumentParser

import vcalentry as vc


def dump(ics_file, tabwidth=3):
    entry = vc.read_file(ics_file)
    print(repr(entry))
    entry.pretty_print(tabwidth=tabwidth)
    return entry


def main(argv=None):
    args = get_arguments(argv)
    for ics_file in args.ics_files:
        try:
            dump(ics_file, tabwidth=args.tabwidth)
        except vc.CalEntryError as e:
            print(f"{ics_file}: {e}")
            return 1
    return 0


def get_arguments(argv=None):
    parser = ArgumentParser(description="calentry_dump prints the details decoded from calendar invitations.")
    parser.add_argument("-V", "--version", action="version", version=vc.VERSION)
    parser.add_argument("-t", "--tabwidth", type=int, default=3, help="Indentation per nesting level")
    parser.add_argument("ics_files", nargs="+", help="The ics files to decode")

    return parser.parse_args(argv)


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        print("Aborted")
