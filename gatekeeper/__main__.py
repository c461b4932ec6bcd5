from gatekeeper.main import main

main()
