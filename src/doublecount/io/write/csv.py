"""Module to write check logs to CSV."""

import os

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes rows of scalars to a CSV file.

    The header is defined by the keys of the first row written. Every
    subsequent row must provide the same keys.
    """

    name = "csv"

    def __init__(self, file_name="output.csv", overwrite=False, append=False):
        """Initialize the basics of the output file.

        Parameters
        ----------
        file_name : str, default 'output.csv'
            Name of the output CSV file
        overwrite : bool, default False
            If True, overwrite the output file if it already exists
        append : bool, default False
            If True, add more rows to an existing CSV file
        """
        # Check that output file does not already exist, if requested
        if not overwrite and not append and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        self.file_name = file_name
        self.result_keys = None
        if append:
            if not os.path.isfile(file_name):
                raise FileNotFoundError(
                    f"File not found at path: {file_name}. When using "
                    "`append=True` in CSVWriter, the file must exist at "
                    "the prescribed path before data is written to it."
                )

            with open(self.file_name, "r", encoding="utf-8") as out_file:
                self.result_keys = out_file.readline().strip().split(",")

    def create(self, result_blob):
        """Initialize the header of the CSV file, record the keys to be stored.

        Parameters
        ----------
        result_blob : dict
            Dictionary of scalars which make up one row
        """
        self.result_keys = list(result_blob.keys())
        with open(self.file_name, "w", encoding="utf-8") as out_file:
            out_file.write(",".join(self.result_keys) + "\n")

    def append(self, result_blob):
        """Append one row to the CSV file.

        Parameters
        ----------
        result_blob : dict
            Dictionary of scalars which make up one row
        """
        self.extend([result_blob])

    def extend(self, result_blobs):
        """Append several rows to the CSV file at once.

        Parameters
        ----------
        result_blobs : List[dict]
            List of dictionaries of scalars, one per row
        """
        if not result_blobs:
            return

        if self.result_keys is None:
            self.create(result_blobs[0])

        lines = []
        for blob in result_blobs:
            if list(blob.keys()) != self.result_keys:
                missing = set(self.result_keys).difference(blob.keys())
                excess = set(blob.keys()).difference(self.result_keys)
                raise AssertionError(
                    "The keys of this row do not match the CSV header. "
                    f"Missing keys: {sorted(missing)}, new keys: {sorted(excess)}"
                )
            lines.append(",".join(str(blob[k]) for k in self.result_keys))

        with open(self.file_name, "a", encoding="utf-8") as out_file:
            out_file.write("\n".join(lines) + "\n")
