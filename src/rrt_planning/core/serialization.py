import os
import json
import codecs
from collections import OrderedDict


def load_json_params(file_path):
    """
    Import planning parameters as a Python dictionary from a .json file.

    Parameters
    ----------
    file_path : string
        Path of the .json file.

    Returns
    -------
    params : dict
        Dictionary representation of the JSON file, suitable for RRTSearch.from_params.
    """
    with codecs.open(file_path, "r", 'utf-8') as f:
        return json.load(f, object_pairs_hook=OrderedDict)


def dump_path(path, directory_path="./", filename="path.json", params=None):
    """
    Writes a planned path, and optionally the parameters that produced it, as JSON.

    Returns
    -------
    file_path : string
        Path of the written file.
    """
    data = {}
    data["path"] = [[float(val) for val in point] for point in path]
    if params is not None:
        data["params"] = params

    if not os.path.exists(directory_path):
        os.makedirs(directory_path)
    file_path = os.path.join(directory_path, filename)
    with open(file_path, "w") as file:
        json.dump(data, file)
    return file_path


def load_path(directory_path, filename="path.json"):
    file_path = os.path.join(directory_path, filename)
    with open(file_path, "r") as file:
        return json.load(file)["path"]
