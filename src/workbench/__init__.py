"""HTTP surface of the workbench: brick library listing, codec variants and pipe evaluation."""
