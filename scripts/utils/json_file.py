import json
import os


def load(filename):
    # loads the json content of a file
    # (error will be raised if file doesn't exist)

    with open(filename) as file:
        return json.load(file)


def save(filename, content=None):
    # saves the json content to a file (creating parent dirs)

    dirname = os.path.dirname(filename)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    with open(filename, "w") as outfile:
        json.dump(
            content or {},
            outfile,
            indent=2,
            sort_keys=True,
        )

    return filename
