"""usage: %prog [options] [filename]

Tokenize an HTML document and print its tokens, one per line. Reads
standard input when no filename is given.
"""

import json
import logging
import sys
import time
from optparse import OptionParser

from . import Characters, Comment, Doctype, EndTag, HTMLTokenizer, StartTag, serialize

log = logging.getLogger("html5tok")


def jsonToken(token):
    """Convert a token to the list form used by html5lib-tests."""
    if isinstance(token, StartTag):
        rv = ["StartTag", token.name, token.attributes]
        if token.self_closing:
            rv.append(True)
        return rv
    elif isinstance(token, EndTag):
        return ["EndTag", token.name]
    elif isinstance(token, Characters):
        return ["Character", token.data]
    elif isinstance(token, Comment):
        return ["Comment", token.data]
    elif isinstance(token, Doctype):
        return ["DOCTYPE", token.name, token.public_id, token.system_id,
                not token.force_quirks]
    raise ValueError("Unknown token: %r" % (token,))


def tokenize():
    optParser = getOptParser()
    opts, args = optParser.parse_args()

    level = logging.WARNING
    if opts.verbose > 1:
        level = logging.DEBUG
    elif opts.verbose:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(name)s: %(message)s")

    if args:
        try:
            f = open(args[-1], "rb")
        except IOError as e:
            sys.stderr.write("Could not open %s: %s\n" % (args[-1], e.strerror))
            sys.exit(1)
    else:
        f = sys.stdin.buffer

    try:
        tokenizer = HTMLTokenizer(f, encoding=opts.encoding,
                                  container=opts.container,
                                  scripting=opts.scripting)
    except LookupError as e:
        f.close()
        sys.stderr.write("%s\n" % e)
        sys.exit(1)

    t0 = time.time()
    with f:
        tokens = list(tokenizer)
    t1 = time.time()
    log.info("read %d tokens from %s in %fs", len(tokens),
             tokenizer.stream.charEncoding[0], t1 - t0)

    printOutput(tokenizer, tokens, opts)


def printOutput(tokenizer, tokens, opts):
    if opts.serialize:
        sys.stdout.write(serialize(tokens, scripting=opts.scripting))
        sys.stdout.write("\n")
    elif opts.json:
        json.dump([jsonToken(token) for token in tokens], sys.stdout, indent=1)
        sys.stdout.write("\n")
    else:
        for token in tokens:
            sys.stdout.write("%r\n" % (token,))
    if opts.errors:
        errList = []
        for error in tokenizer.errors:
            errList.append(str(error))
        sys.stdout.write("\nParse errors:\n" + "\n".join(errList) + "\n")


def getOptParser():
    parser = OptionParser(usage=__doc__)

    parser.add_option("-e", "--errors", action="store_true", default=False,
                      dest="errors", help="Print a list of parse errors")

    parser.add_option("-s", "--serialize", action="store_true", default=False,
                      dest="serialize", help="Print the re-serialized markup "
                      "instead of the tokens")

    parser.add_option("-j", "--json", action="store_true", default=False,
                      dest="json", help="Print the tokens as JSON in "
                      "html5lib-tests format")

    parser.add_option("", "--encoding", action="store", type="string",
                      dest="encoding", help="Transport encoding of the input "
                      "(default utf-8; a BOM overrides it)")

    parser.add_option("-c", "--container", action="store", type="string",
                      dest="container", help="Element the input is the "
                      "content of, for fragments")

    parser.add_option("", "--scripting", action="store_true", default=False,
                      dest="scripting", help="Treat noscript content as raw text")

    parser.add_option("-v", "--verbose", action="count", default=0,
                      dest="verbose", help="Log progress; twice to log each "
                      "parse error as it is found")

    return parser


if __name__ == "__main__":
    tokenize()
