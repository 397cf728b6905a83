import logging
import sys

from gitstore.config import StoreConfig
from gitstore.errors import GitStoreError
from gitstore.models import Git
from gitstore.utils import get_parser

FATAL_EXIT_CODE = 128


def run(git: Git, args):
    match args.command:
        case "init":
            return git.init_repo()
        case "cat-file":
            return git.cat_file(args.hash, pretty_print=args.pretty_print)
        case "hash-object":
            return git.hash_object(args.path, write=args.write)
        case "ls-tree":
            return git.ls_tree(args.hash_value, name_only=args.name_only)
        case "write-tree":
            return git.write_tree()


def main(argv=None) -> int:
    parser = get_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    git = Git(StoreConfig.from_env(args.work_tree))
    try:
        run(git, args)
    except (GitStoreError, OSError) as exc:
        sys.stderr.write(f"fatal: {exc}\n")
        return FATAL_EXIT_CODE
    return 0


if __name__ == "__main__":
    sys.exit(main())
