"""HTTP service over the segmentation engine."""
