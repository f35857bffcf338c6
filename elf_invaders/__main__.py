"""python -m elf_invaders"""

from .cli import main


if __name__ == "__main__":
    main()
