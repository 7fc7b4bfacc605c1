from boutique.main import main

main()
