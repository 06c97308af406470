import random
import string
from beefdock.MODELS.build_recipe import BuildRecipe
from beefdock.MODELS.errors import UsageError
from beefdock.PARSERS.image_list_parser import ImageListParser
from beefdock.PARSERS.options_parser import OptionsParser

TOKENS = ["-b", "--branch", "--branch=", "--branch=dev", "-h", "--help", "--no-color", "--", "x"]


def random_string(length):
    return ''.join(random.choice(string.printable) for _ in range(length))


def test_fuzz_options_parser():
    parser = OptionsParser()
    for _ in range(200):
        args = [random.choice(TOKENS + [random_string(random.randint(0, 12))])
                for _ in range(random.randint(0, 6))]
        try:
            opts = parser.parse(args)
        except UsageError as e:
            # Only the two documented usage exit codes
            assert e.exit_code in (1, 127)
        else:
            assert opts.branch


def test_fuzz_image_list_parser():
    for _ in range(100):
        content = random_string(random.randint(0, 1000))
        for image in ImageListParser.parse_from_string(content):
            assert image.repository and image.image_id
            assert "\t" not in image.tag


def test_empty_recipe_renders():
    assert BuildRecipe().render() == ""
