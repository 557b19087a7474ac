from rich.pretty import pprint

from argline import *

__prog__ = "argline-demo"

parser = Parser([
    Option("verbose", descr="print more"),
    Option("output", "o", descr="output file", expects_value=True),
    Option("jobs", descr="number of parallel jobs", expects_value=True),
    Option("help", descr="show this listing"),
], shell=True)


if __name__ == '__main__':
    parser.parse()
    if parser["help"]:
        parser.print_available_options()
    else:
        pprint(parser)
        pprint({
            "output": parser["output"]("out.txt"),
            "jobs": parser["jobs"].cast(uint8, 1),
            "verbose": parser["verbose"](False),
        })
