"""sharemirror - Mirror directory trees to and from Azure file shares."""
