import argparse
import logging
import sys

from amaranth.back import rtlil, cxxrtl, verilog

from pipealu.alu import ALU
from pipealu.check import check_equivalence, random_requests
from pipealu.pipeline import PipelinedALU


__all__ = ["main_parser", "main_runner", "main"]


logger = logging.getLogger("pipealu")


# language of the generated code, by file extension
_backends = {
    "il": rtlil,
    "cc": cxxrtl,
    "v":  verilog,
}


def main_parser(parser=None):
    if parser is None:
        parser = argparse.ArgumentParser()

    p_action = parser.add_subparsers(dest="action")

    p_generate = p_action.add_parser("generate",
            help="generate RTLIL, Verilog or CXXRTL from the design")
    p_generate.add_argument("-t", "--type",
            dest="generate_type", metavar="LANGUAGE", choices=list(_backends),
            help="generate LANGUAGE (il for RTLIL, v for Verilog, cc for CXXRTL; "
                 "default: file extension of FILE, if given)")
    p_generate.add_argument("--no-src",
            dest="emit_src", default=True, action="store_false",
            help="suppress generation of source location attributes")
    p_generate.add_argument("generate_file",
            metavar="FILE", type=argparse.FileType("w"), nargs="?",
            help="write generated code to FILE")

    p_simulate = p_action.add_parser("simulate",
            help="check both ALU variants against each other with random inputs")
    p_simulate.add_argument("-c", "--cycles",
            type=int, default=1000,
            help="number of cycles to simulate")
    p_simulate.add_argument("-s", "--seed",
            type=int, default=None,
            help="random seed")
    p_simulate.add_argument("--vcd",
            dest="vcd_file", metavar="VCD-FILE", default=None,
            help="write waveforms to VCD-FILE")

    return parser


def _generate(parser, args, design, name):
    generate_type = args.generate_type
    if generate_type is None and args.generate_file:
        _, dot, extension = args.generate_file.name.rpartition(".")
        if dot and extension in _backends:
            generate_type = extension
    if generate_type is None:
        parser.error("Unable to auto-detect language, specify explicitly with -t/--type")

    output = _backends[generate_type].convert(design, name=name, emit_src=args.emit_src)
    if args.generate_file:
        args.generate_file.write(output)
    else:
        print(output)
    return 0


def _simulate(parser, args):
    if args.cycles < 1:
        parser.error("--cycles must be a positive integer")

    mismatches = check_equivalence(random_requests(args.cycles, args.seed),
                                   vcd_file=args.vcd_file)
    if mismatches:
        logger.error("%d mismatches, first at cycle %d", len(mismatches), mismatches[0].cycle)
        return 1
    logger.info("both ALU variants agree over %d cycles", args.cycles)
    return 0


def main_runner(parser, args, design, name="top"):
    """Run the action selected by ``args`` and return the exit status."""
    if args.action == "generate":
        return _generate(parser, args, design, name)
    if args.action == "simulate":
        return _simulate(parser, args)
    parser.print_help()
    return 2



def main():
    parser = argparse.ArgumentParser(formatter_class=argparse.ArgumentDefaultsHelpFormatter)

    parser.add_argument("--pipelined",
            default=False, action="store_true",
            help="generate the 2-stage pipelined ALU instead of the single-cycle one")
    parser.add_argument("-v", "--verbose",
            default=0, action="count",
            help="increase logging verbosity")

    main_parser(parser)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(levelname)s:%(name)s: %(message)s")

    if args.pipelined:
        alu = PipelinedALU()
    else:
        alu = ALU()

    sys.exit(main_runner(parser, args, alu, name="pipealu_alu"))


if __name__ == "__main__":
    main()
