# Utils package for the Nellore Bazaar backend
