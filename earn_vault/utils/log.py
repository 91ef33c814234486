"""Console output for the engine and the simulation CLI"""

from colorama import Fore, Style

RULE = "-" * 73


def h1(msg):
    print(f"\n\n{Fore.CYAN}{RULE}")
    print(f"{Fore.CYAN}{msg}{Style.RESET_ALL}\n")


def h2(msg):
    print(f"\n{Fore.LIGHTBLUE_EX}▸ {msg}{Style.RESET_ALL}\n")


def h3(msg):
    print(f"\t{Fore.GREEN}{msg}{Style.RESET_ALL}")


def warn(msg):
    print(f"\t{Fore.YELLOW}{msg}{Style.RESET_ALL}")


def error(msg):
    print(f"{Fore.RED}{msg}{Style.RESET_ALL}")


def info(msg):
    print(msg)


def kv(label, value):
    print(f"\t{Style.DIM}{label:<18}{Style.RESET_ALL}{value}")


def fmt_amount(amount, decimals):
    """Raw token units as a decimal string, e.g. 1500000 @ 6 -> '1.500000'"""
    whole, frac = divmod(amount, 10 ** decimals)
    if decimals == 0:
        return f"{whole:,}"
    return f"{whole:,}.{frac:0{decimals}d}"
