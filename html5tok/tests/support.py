import glob
import os

base_path = os.path.split(__file__)[0]

test_dir = os.path.join(base_path, 'testdata')


def get_data_files(subdirectory, files='*.test'):
    return sorted(glob.glob(os.path.join(test_dir, subdirectory, files)))


def errorMessage(input, expected, actual):
    msg = ("Input:\n%s\nExpected:\n%s\nRecieved\n%s\n" %
           (repr(input), repr(expected), repr(actual)))
    return msg
