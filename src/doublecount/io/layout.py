"""Names of the products stored in a double-counting event store.

Each product lives under the group of the producer which made it:

.. code-block:: text

    /run_info                            (n_entries, 3) [run, subrun, event]
    /<hit_label>/hit/counts              (n_entries,) number of hits
    /<pandora_label>/cluster/counts      (n_entries,) number of clusters
    /<pandora_label>/pfparticle/counts   (n_entries,) number of PFOs
    /<pandora_label>/<assn>/pairs        (n_assn, 2) (source key, target key)
    /<pandora_label>/<assn>/offsets      (n_entries + 1,) pair offsets

The association pairs of entry `i` are `pairs[offsets[i]:offsets[i+1]]`,
in association order.
"""

RUN_INFO_KEY = "run_info"

HIT_KEY = "hit"
CLUSTER_KEY = "cluster"
PFO_KEY = "pfparticle"
PFO_CLUSTER_KEY = "pfparticle_cluster"
CLUSTER_HIT_KEY = "cluster_hit"

COUNTS = "counts"
PAIRS = "pairs"
OFFSETS = "offsets"


def product_path(label, product, dataset):
    """Returns the path of a dataset within the file.

    Parameters
    ----------
    label : str
        Producer label
    product : str
        Product name
    dataset : str
        Dataset name within the product group

    Returns
    -------
    str
        Full dataset path
    """
    return f"{label}/{product}/{dataset}"
