from shopper_api.server import main

main()
